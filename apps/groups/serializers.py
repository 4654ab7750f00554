from rest_framework import serializers
from decimal import Decimal
from .models import Group, FineRule, PaymentSettings


class FineRuleSerializer(serializers.ModelSerializer):
    """Fine rule as shown to admins and members."""

    fromDate = serializers.DateField(source='from_date', allow_null=True, required=False)
    toDate = serializers.DateField(source='to_date', allow_null=True, required=False)

    class Meta:
        model = FineRule
        fields = ['fromDate', 'toDate', 'amount']


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    baseAmount = serializers.DecimalField(source='base_amount', max_digits=10, decimal_places=2)
    previousContribution = serializers.DecimalField(
        source='previous_contribution', max_digits=12, decimal_places=2
    )
    fineRules = FineRuleSerializer(source='fine_rules', many=True, read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'baseAmount',
            'previousContribution',
            'fineRules',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.members.count()


class GroupWriteSerializer(serializers.Serializer):
    """Input serializer for creating and updating the group."""

    name = serializers.CharField(max_length=200)
    baseAmount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.00')
    )
    previousContribution = serializers.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal('0.00')
    )
    fineRules = FineRuleSerializer(many=True, required=False)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Required')
        return value.strip()

    def to_service_kwargs(self):
        data = self.validated_data
        kwargs = {}
        if 'name' in data:
            kwargs['name'] = data['name']
        if 'baseAmount' in data:
            kwargs['base_amount'] = data['baseAmount']
        if 'previousContribution' in data:
            kwargs['previous_contribution'] = data['previousContribution']
        if 'fineRules' in data:
            kwargs['fine_rules'] = [dict(rule) for rule in data['fineRules']]
        return kwargs


class AmountDueSerializer(serializers.Serializer):
    """Today's amount due with the fine split out."""

    date = serializers.DateField()
    base_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    fine_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    applied_rules = FineRuleSerializer(many=True)


class PaymentSettingsSerializer(serializers.ModelSerializer):
    """Gateway/UPI settings."""

    gatewayEnabled = serializers.BooleanField(source='gateway_enabled')
    upiId = serializers.CharField(source='upi_id', allow_blank=True, default='')
    manualPayments = serializers.BooleanField(source='accepts_manual_payments', read_only=True)

    class Meta:
        model = PaymentSettings
        fields = ['gatewayEnabled', 'upiId', 'manualPayments', 'updated_at']
        read_only_fields = ['updated_at']
