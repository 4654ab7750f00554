"""
Domain exceptions for the payments app.

Services raise these; views translate them into HTTP responses.
"""


class PaymentsServiceError(Exception):
    """Base exception for payment service errors."""
    pass


class ScreenshotRequiredError(PaymentsServiceError):
    """Raised when a payment is submitted without proof."""
    pass


class ContributionAlreadyPaidError(PaymentsServiceError):
    """Raised when paying for a month that is already paid."""
    pass


class PaymentRequestNotFoundError(PaymentsServiceError):
    """Raised when a payment request does not exist."""
    pass


class InvalidStateTransitionError(PaymentsServiceError):
    """Raised when deciding a request that is no longer pending."""
    pass


class InsufficientPermissionsError(PaymentsServiceError):
    """Raised when a non-admin tries an admin-only operation."""
    pass


class PaymentIdGenerationError(PaymentsServiceError):
    """Raised when no unique payment ID could be generated."""
    pass


class InvalidScreenshotError(PaymentsServiceError):
    """Raised when an uploaded screenshot cannot be embedded."""
    pass


class UPIUnavailableError(PaymentsServiceError):
    """Raised when a UPI QR is requested but no UPI ID is configured."""
    pass


class InvalidAmountError(PaymentsServiceError):
    """Raised when a payment amount is not positive."""
    pass
