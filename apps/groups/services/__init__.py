"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    GroupAlreadyExistsError,
    InvalidFineRuleError,
    PaymentSettingsError,
)

from .group_management import (
    create_group,
    update_group,
    delete_group,
    get_group_by_id,
    get_active_group,
)

from .fines import (
    amount_due_today,
    calculate_amount,
    default_tiered_amount,
    fine_breakdown,
)

from .payment_settings import (
    get_payment_settings,
    update_payment_settings,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'GroupAlreadyExistsError',
    'InvalidFineRuleError',
    'PaymentSettingsError',

    # Group Management
    'create_group',
    'update_group',
    'delete_group',
    'get_group_by_id',
    'get_active_group',

    # Fine Rules
    'amount_due_today',
    'calculate_amount',
    'default_tiered_amount',
    'fine_breakdown',

    # Payment Settings
    'get_payment_settings',
    'update_payment_settings',
]
