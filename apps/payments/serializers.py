from rest_framework import serializers
from decimal import Decimal
from .models import PaymentRequest, PaymentRequestStatus
from apps.contributions.models import MONTH_VALIDATOR


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentRequestFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for payment request filtering.

    Query Parameters:
        status (str): pending, accepted or rejected
        month (str): YYYY-MM
    """

    status = serializers.ChoiceField(choices=PaymentRequestStatus.choices, required=False)
    month = serializers.CharField(required=False, validators=[MONTH_VALIDATOR])


class PaymentSubmitSerializer(serializers.Serializer):
    """
    Validate a payment submission.

    The screenshot is either a data: URL in JSON or an uploaded file in a
    multipart request. A missing screenshot is reported by the service.
    """

    month = serializers.CharField(required=False, validators=[MONTH_VALIDATOR])
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False
    )
    upiId = serializers.CharField(max_length=100, required=False, allow_blank=True)
    screenshot = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class DecisionSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class PaymentStatusFilterSerializer(serializers.Serializer):
    month = serializers.CharField(required=False, validators=[MONTH_VALIDATOR])


class UPIQRFilterSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False
    )


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentRequestListSerializer(serializers.ModelSerializer):
    """Payment request without the screenshot, for listings."""

    username = serializers.CharField(source='user.username', read_only=True)
    upiId = serializers.CharField(source='upi_id', read_only=True)
    paymentID = serializers.CharField(source='payment_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    decidedAt = serializers.DateTimeField(source='decided_at', read_only=True)
    decidedBy = serializers.SerializerMethodField()
    rejectionReason = serializers.CharField(source='rejection_reason', read_only=True)

    class Meta:
        model = PaymentRequest
        fields = [
            'id',
            'username',
            'month',
            'amount',
            'upiId',
            'status',
            'paymentID',
            'createdAt',
            'decidedAt',
            'decidedBy',
            'rejectionReason',
        ]
        read_only_fields = fields

    def get_decidedBy(self, obj):
        return obj.decided_by.username if obj.decided_by_id else None


class PaymentRequestSerializer(PaymentRequestListSerializer):
    """Full payment request including the screenshot."""

    class Meta(PaymentRequestListSerializer.Meta):
        fields = PaymentRequestListSerializer.Meta.fields + ['screenshot']
        read_only_fields = fields


class PaymentStatusSerializer(serializers.Serializer):
    month = serializers.CharField()
    state = serializers.CharField()
    can_pay = serializers.BooleanField()
    can_download_receipt = serializers.BooleanField()
    payment_id = serializers.CharField(allow_blank=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    upi_id = serializers.CharField(allow_blank=True)
    upi_uri = serializers.CharField(allow_null=True)
    manual_payments = serializers.BooleanField()
    latest_request = PaymentRequestListSerializer(allow_null=True)
