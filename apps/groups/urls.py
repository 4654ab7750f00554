from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List groups
    # POST   /api/groups/              - Create group (admin)
    # GET    /api/groups/{id}/         - Get group details
    # PUT    /api/groups/{id}/         - Update group and fine rules (admin)
    # PATCH  /api/groups/{id}/         - Partial update (admin)
    # DELETE /api/groups/{id}/         - Delete group and members (admin)

    # Custom group actions
    # GET    /api/groups/{id}/amount_due/  - Today's amount incl. fines

    # Additional endpoints (registered before the router's empty prefix)
    path('amount_due/', views.current_amount_due, name='current-amount-due'),
    path('settings/', views.payment_settings, name='payment-settings'),

    # Include router URLs
    path('', include(router.urls)),
]
