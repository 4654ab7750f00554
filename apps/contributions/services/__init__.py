"""Services for the contribution ledger."""

from .exceptions import (
    ContributionsServiceError,
    ContributionNotFoundError,
    ReceiptNotAvailableError,
    InvalidMonthError,
)
from .ledger import (
    current_month,
    validate_month,
    get_contribution_by_id,
    get_contribution,
    create_initial_record,
    reconcile_payment_acceptance,
)
from .statements import get_member_statement, get_group_dashboard
from .receipts import build_receipt, format_month
from apps.contributions.feeds import contribution_feed

__all__ = [
    # Exceptions
    'ContributionsServiceError',
    'ContributionNotFoundError',
    'ReceiptNotAvailableError',
    'InvalidMonthError',
    # Ledger
    'current_month',
    'validate_month',
    'get_contribution_by_id',
    'get_contribution',
    'create_initial_record',
    'reconcile_payment_acceptance',
    'contribution_feed',
    # Reporting
    'get_member_statement',
    'get_group_dashboard',
    'build_receipt',
    'format_month',
]
