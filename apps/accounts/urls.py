from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'users'

router = DefaultRouter()
router.register(r'members', views.MemberViewSet, basename='member')

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('password/change/', views.change_password, name='password-change'),

    # Member profile
    path('user/', views.get_current_user, name='current-user'),

    # Member management (admin)
    # GET/POST         /api/auth/members/
    # GET/PUT/DELETE   /api/auth/members/{id}/
    path('', include(router.urls)),
]
