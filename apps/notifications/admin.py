from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['username', 'type', 'title', 'read', 'created_at']
    list_filter = ['type', 'read', 'created_at']
    search_fields = ['username', 'title', 'message']
    readonly_fields = ['created_at']
    raw_id_fields = ['recipient']
    date_hierarchy = 'created_at'
