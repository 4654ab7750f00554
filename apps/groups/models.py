# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Group(models.Model):
    """Contribution group. Only the earliest-created group is active."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    base_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    # Collected before the group was tracked here
    previous_contribution = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        ordering = ['created_at']

    def __str__(self):
        return self.name

    def get_fine_rules(self):
        return list(self.fine_rules.all())


class FineRule(models.Model):
    """
    Date-triggered fine added on top of the base amount.

    Only the month and day of ``from_date`` matter; the year is discarded
    when the rule is evaluated. ``to_date`` is kept for display.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='fine_rules')
    from_date = models.DateField(null=True, blank=True)
    to_date = models.DateField(null=True, blank=True)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'group_fine_rules'
        ordering = ['position']
        indexes = [
            models.Index(fields=['group', 'position']),
        ]

    def __str__(self):
        return f"{self.from_date} - {self.to_date}: +{self.amount}"


class PaymentSettings(models.Model):
    """Singleton row with the group's payment collection settings."""

    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    gateway_enabled = models.BooleanField(default=True)
    upi_id = models.CharField(max_length=100, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_settings'
        verbose_name_plural = 'payment settings'

    def __str__(self):
        return f"Gateway {'on' if self.gateway_enabled else 'off'} / UPI {self.upi_id or '-'}"

    @classmethod
    def load(cls):
        settings_row, _ = cls.objects.get_or_create(id=cls.SINGLETON_ID)
        return settings_row

    @property
    def accepts_manual_payments(self):
        """Members submit screenshots only when the gateway is off and a UPI id is set."""
        return not self.gateway_enabled and bool(self.upi_id)
