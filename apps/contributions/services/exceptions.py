"""Domain-specific exceptions for contribution services."""


class ContributionsServiceError(Exception):
    """Base exception for contribution services."""
    pass


class ContributionNotFoundError(ContributionsServiceError):
    """Raised when a contribution record does not exist."""
    pass


class ReceiptNotAvailableError(ContributionsServiceError):
    """Raised when a receipt is requested for an unpaid month."""
    pass


class InvalidMonthError(ContributionsServiceError):
    """Raised when a month is not in YYYY-MM form."""
    pass
