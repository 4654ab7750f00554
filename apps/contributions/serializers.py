from rest_framework import serializers
from .models import Contribution, ContributionStatus, MONTH_VALIDATOR


# =============================================================================
# Input Serializers
# =============================================================================

class ContributionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for contribution filtering.

    Query Parameters:
        month (str): YYYY-MM
        status (str): pending or paid
        username (str): Member username (admins only)
    """

    month = serializers.CharField(required=False, validators=[MONTH_VALIDATOR])
    status = serializers.ChoiceField(choices=ContributionStatus.choices, required=False)
    username = serializers.CharField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ContributionSerializer(serializers.ModelSerializer):
    """Ledger record with the field names clients already use."""

    username = serializers.CharField(source='user.username', read_only=True)
    dueDate = serializers.DateField(source='due_date', read_only=True)
    paidDate = serializers.DateTimeField(source='paid_date', read_only=True)
    paymentID = serializers.CharField(source='payment_id', read_only=True)

    class Meta:
        model = Contribution
        fields = ['id', 'username', 'month', 'amount', 'status', 'dueDate', 'paidDate', 'paymentID']
        read_only_fields = fields


class StatementSerializer(serializers.Serializer):
    month = serializers.CharField()
    this_month = ContributionSerializer(allow_null=True)
    previous_pending = ContributionSerializer(many=True)
    upcoming = ContributionSerializer(many=True)
    history = ContributionSerializer(many=True)
    amount_due = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_due = serializers.DecimalField(max_digits=12, decimal_places=2)


class MonthlyTotalSerializer(serializers.Serializer):
    month = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    count = serializers.IntegerField()


class MemberTotalSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    username = serializers.CharField()
    name = serializers.CharField()
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2)


class MemberMonthStatusSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    username = serializers.CharField()
    name = serializers.CharField()
    paid = serializers.BooleanField()


class DashboardSerializer(serializers.Serializer):
    group = serializers.SerializerMethodField()
    month = serializers.CharField()
    amount_due = serializers.DecimalField(max_digits=10, decimal_places=2)
    previous_contribution = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    grand_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    monthly_totals = MonthlyTotalSerializer(many=True)
    member_totals = MemberTotalSerializer(many=True)
    current_month = MemberMonthStatusSerializer(many=True)

    def get_group(self, obj):
        group = obj['group']
        if group is None:
            return None
        return {'id': str(group.id), 'name': group.name}


class ReceiptSerializer(serializers.Serializer):
    contribution_id = serializers.UUIDField()
    username = serializers.CharField()
    name = serializers.CharField()
    month = serializers.CharField()
    month_display = serializers.CharField()
    status = serializers.CharField()
    paid_date = serializers.DateTimeField(allow_null=True)
    payment_id = serializers.CharField()
    base_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    fine_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
