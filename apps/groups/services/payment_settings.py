"""Payment settings service."""

from django.db import transaction

from apps.groups.models import PaymentSettings

from .exceptions import PaymentSettingsError


def get_payment_settings() -> PaymentSettings:
    return PaymentSettings.load()


@transaction.atomic
def update_payment_settings(*, gateway_enabled: bool, upi_id: str = '') -> PaymentSettings:
    """
    Save gateway/UPI settings.

    Raises:
        PaymentSettingsError: If the gateway is off and no UPI ID is given
    """
    upi_id = (upi_id or '').strip()
    if not gateway_enabled and not upi_id:
        raise PaymentSettingsError("UPI ID is required when payment gateway is off")

    settings_row = PaymentSettings.load()
    settings_row.gateway_enabled = gateway_enabled
    settings_row.upi_id = upi_id
    settings_row.save(update_fields=['gateway_enabled', 'upi_id', 'updated_at'])
    return settings_row
