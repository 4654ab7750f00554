from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'notifications'

router = DefaultRouter()
router.register(r'', views.NotificationViewSet, basename='notification')

urlpatterns = [
    # GET  /api/notifications/                  - Own notifications
    # POST /api/notifications/{id}/mark_read/   - Mark one as read
    # POST /api/notifications/mark_all_read/    - Mark all as read
    # GET  /api/notifications/unread_count/     - Unread badge count
    path('', include(router.urls)),
]
