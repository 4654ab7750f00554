from django.contrib import admin
from .models import Contribution


@admin.register(Contribution)
class ContributionAdmin(admin.ModelAdmin):
    """Admin interface for ledger records."""

    list_display = ['user', 'month', 'amount', 'status', 'paid_date', 'payment_id']
    list_filter = ['status', 'month']
    search_fields = ['user__username', 'user__name', 'payment_id']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    ordering = ['-month', 'user__username']
