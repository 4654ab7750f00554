"""Services for the payment request workflow."""

from .exceptions import (
    PaymentsServiceError,
    ScreenshotRequiredError,
    ContributionAlreadyPaidError,
    PaymentRequestNotFoundError,
    InvalidStateTransitionError,
    InsufficientPermissionsError,
    PaymentIdGenerationError,
    InvalidScreenshotError,
    UPIUnavailableError,
    InvalidAmountError,
)
from .submission import generate_payment_id, submit_payment_request
from .decision import decide_payment_request, accept_payment_request, reject_payment_request
from .queries import (
    get_payment_request_by_id,
    get_latest_payment_request,
    get_payment_status,
    delete_payment_request,
)
from .screenshots import encode_screenshot, validate_screenshot_data_url
from .upi import build_upi_uri, generate_upi_qr

__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'ScreenshotRequiredError',
    'ContributionAlreadyPaidError',
    'PaymentRequestNotFoundError',
    'InvalidStateTransitionError',
    'InsufficientPermissionsError',
    'PaymentIdGenerationError',
    'InvalidScreenshotError',
    'UPIUnavailableError',
    'InvalidAmountError',
    # Workflow
    'generate_payment_id',
    'submit_payment_request',
    'decide_payment_request',
    'accept_payment_request',
    'reject_payment_request',
    # Queries
    'get_payment_request_by_id',
    'get_latest_payment_request',
    'get_payment_status',
    'delete_payment_request',
    # Screenshots / UPI
    'encode_screenshot',
    'validate_screenshot_data_url',
    'build_upi_uri',
    'generate_upi_qr',
]
