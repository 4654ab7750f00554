from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.contributions.models import MONTH_VALIDATOR


class PaymentRequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'


class PaymentRequest(models.Model):
    """A member's claim that they paid, awaiting an admin decision."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='payment_requests'
    )
    month = models.CharField(max_length=7, validators=[MONTH_VALIDATOR])

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    upi_id = models.CharField(max_length=100, blank=True)

    # Proof of payment, stored inline as a data: URL
    screenshot = models.TextField()

    status = models.CharField(
        max_length=10,
        choices=PaymentRequestStatus.choices,
        default=PaymentRequestStatus.PENDING
    )

    # Reference shown on receipts: PI + ddmmyyyy + 4 digits
    payment_id = models.CharField(
        max_length=32,
        unique=True,
        db_index=True,
        editable=False
    )

    # Decision
    decided_at = models.DateTimeField(null=True, blank=True)
    decided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='decided_payment_requests'
    )
    rejection_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'payment_requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'month', 'created_at']),
            models.Index(fields=['status', 'created_at']),
        ]

    def __str__(self):
        return f"{self.payment_id} {self.user.username} {self.month} ({self.status})"

    @property
    def is_pending(self):
        return self.status == PaymentRequestStatus.PENDING
