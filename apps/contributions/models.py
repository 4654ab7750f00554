from django.db import models
from django.conf import settings
from django.core.validators import RegexValidator, MinValueValidator
from decimal import Decimal
import uuid


MONTH_VALIDATOR = RegexValidator(
    regex=r'^\d{4}-(0[1-9]|1[0-2])$',
    message='Month must be in YYYY-MM format'
)


class ContributionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'


class Contribution(models.Model):
    """One member's contribution for one month."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='contributions'
    )
    month = models.CharField(max_length=7, validators=[MONTH_VALIDATOR])

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=10,
        choices=ContributionStatus.choices,
        default=ContributionStatus.PENDING
    )

    due_date = models.DateField(null=True, blank=True)
    paid_date = models.DateTimeField(null=True, blank=True)
    payment_id = models.CharField(max_length=32, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'contribution'
        ordering = ['-month']
        constraints = [
            models.UniqueConstraint(fields=['user', 'month'], name='unique_contribution_per_month'),
        ]
        indexes = [
            models.Index(fields=['month', 'status']),
        ]

    def __str__(self):
        return f"{self.user.username} {self.month}: {self.amount} ({self.status})"

    @property
    def is_paid(self):
        return self.status == ContributionStatus.PAID
