from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'contributions'

router = DefaultRouter()
router.register(r'', views.ContributionViewSet, basename='contribution')

urlpatterns = [
    # GET /api/contributions/                 - Ledger records
    # GET /api/contributions/{id}/            - One record
    # GET /api/contributions/statement/       - Current member's statement
    # GET /api/contributions/dashboard/       - Group totals
    # GET /api/contributions/{id}/receipt/    - Receipt data (paid only)
    path('', include(router.urls)),
]
