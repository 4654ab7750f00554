"""
UPI payment links and QR codes.

Scanning the QR in any UPI app pre-fills the payee and amount.

Format::

    upi://pay?pa=<upi id>&pn=GroupContribution&am=<amount>

Example::

    uri = build_upi_uri('group@okbank', Decimal('1200.00'))
    # 'upi://pay?pa=group%40okbank&pn=GroupContribution&am=1200'

    png_bytes = generate_upi_qr('group@okbank', Decimal('1200.00'))
"""

from io import BytesIO
from urllib.parse import quote

import qrcode

from apps.notifications.services import format_amount
from .exceptions import UPIUnavailableError

UPI_PAYEE_NAME = 'GroupContribution'

# Characters left unescaped in the payee address
UPI_SAFE_CHARS = "-_.!~*'()"


def build_upi_uri(upi_id, amount) -> str:
    """Build the upi://pay link for upi_id and amount."""
    if not upi_id:
        raise UPIUnavailableError("UPI ID is not configured")
    return (
        f"upi://pay?pa={quote(upi_id, safe=UPI_SAFE_CHARS)}"
        f"&pn={UPI_PAYEE_NAME}&am={format_amount(amount)}"
    )


def generate_upi_qr(upi_id, amount) -> bytes:
    """
    Render the UPI link as a PNG QR code.

    Uses error correction level M, like printed payment QR codes.

    Raises:
        UPIUnavailableError: If no UPI ID is given
    """
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(build_upi_uri(upi_id, amount))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
