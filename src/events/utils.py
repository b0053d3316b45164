import secrets
import string
import time
from io import BytesIO

import qrcode

from common.models import SiteSettings

TICKET_CODE_PREFIX = "TICKET"
TICKET_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_ticket_code(now_ms: int | None = None) -> str:
    """Build a human-readable ticket code.

    Format: ``TICKET-<last 6 digits of the epoch milliseconds>-<4 random [A-Z0-9]>``.
    Uniqueness is not guaranteed here; callers must check against existing codes.
    """
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    timestamp_part = str(now_ms)[-6:].rjust(6, "0")
    random_part = "".join(secrets.choice(TICKET_CODE_ALPHABET) for _ in range(4))
    return f"{TICKET_CODE_PREFIX}-{timestamp_part}-{random_part}"


def get_ticket_url(ticket_code: str, site_settings: SiteSettings | None = None) -> str:
    """The frontend page that shows a ticket and its status."""
    site_settings = site_settings or SiteSettings.get_solo()
    return f"{site_settings.frontend_base_url.rstrip('/')}/my-tickets/{ticket_code}"


def make_qr_png(data: str) -> bytes:
    """Render ``data`` as a QR code and return the PNG bytes."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = BytesIO()
    img.save(buffered, "PNG")
    return buffered.getvalue()


def make_ticket_qr_png(ticket_code: str, site_settings: SiteSettings | None = None) -> bytes:
    """QR code pointing at the ticket's lookup page."""
    return make_qr_png(get_ticket_url(ticket_code, site_settings=site_settings))
