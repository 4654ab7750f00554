from django.contrib import admin
from django.utils.html import format_html
from .models import PaymentRequest, PaymentRequestStatus


@admin.register(PaymentRequest)
class PaymentRequestAdmin(admin.ModelAdmin):
    """Admin interface for payment requests."""

    list_display = [
        'payment_id',
        'user',
        'month',
        'amount',
        'status_badge',
        'created_at',
        'decided_by',
    ]
    list_filter = ['status', 'month', 'created_at']
    search_fields = ['payment_id', 'user__username', 'user__name']
    readonly_fields = ['payment_id', 'created_at', 'decided_at', 'decided_by', 'screenshot_preview']
    raw_id_fields = ['user']
    exclude = ['screenshot']
    date_hierarchy = 'created_at'

    def status_badge(self, obj):
        colors = {
            PaymentRequestStatus.PENDING: '#888',
            PaymentRequestStatus.ACCEPTED: '#6B8E5E',
            PaymentRequestStatus.REJECTED: '#B85C5C',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#888'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def screenshot_preview(self, obj):
        if not obj.screenshot:
            return '-'
        return format_html('<img src="{}" style="max-height: 300px;" />', obj.screenshot)
    screenshot_preview.short_description = 'Screenshot'
