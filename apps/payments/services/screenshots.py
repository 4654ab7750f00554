"""Payment screenshots are kept inline as data: URLs."""

import base64

from django.conf import settings

from .exceptions import InvalidScreenshotError

DATA_URL_PREFIX = 'data:image/'


def _max_bytes():
    return getattr(settings, 'PAYMENT_SCREENSHOT_MAX_BYTES', 5 * 1024 * 1024)


def encode_screenshot(uploaded_file) -> str:
    """
    Embed an uploaded image as a base64 data: URL.

    Raises:
        InvalidScreenshotError: If the upload is not an image or is too large
    """
    content_type = getattr(uploaded_file, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise InvalidScreenshotError("Screenshot must be an image")

    if uploaded_file.size > _max_bytes():
        raise InvalidScreenshotError("Screenshot is too large")

    payload = base64.b64encode(uploaded_file.read()).decode('ascii')
    return f'data:{content_type};base64,{payload}'


def validate_screenshot_data_url(value: str) -> str:
    """Accept a client-encoded image data: URL as is."""
    if not value.startswith(DATA_URL_PREFIX) or ';base64,' not in value:
        raise InvalidScreenshotError("Screenshot must be an image data URL")
    if len(value) > _max_bytes() * 4 // 3 + 100:
        raise InvalidScreenshotError("Screenshot is too large")
    return value
