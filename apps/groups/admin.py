# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group, FineRule, PaymentSettings


class FineRuleInline(admin.TabularInline):
    """Inline admin for fine rules."""
    model = FineRule
    extra = 0
    fields = ['position', 'from_date', 'to_date', 'amount']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for the contribution group."""

    list_display = [
        'name',
        'base_amount',
        'previous_contribution',
        'member_count',
        'created_at'
    ]
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [FineRuleInline]
    ordering = ['created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'base_amount', 'previous_contribution')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        """Show number of members."""
        return obj.members.count()
    member_count.short_description = 'Members'


@admin.register(PaymentSettings)
class PaymentSettingsAdmin(admin.ModelAdmin):
    """Admin interface for the payment settings singleton."""

    list_display = ['gateway_enabled', 'upi_id', 'updated_at']
    readonly_fields = ['updated_at']

    def has_add_permission(self, request):
        return not PaymentSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
