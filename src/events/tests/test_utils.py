import re

import pytest

from common.models import SiteSettings
from events.utils import generate_ticket_code, get_ticket_url, make_ticket_qr_png

TICKET_CODE_RE = re.compile(r"^TICKET-\d{6}-[A-Z0-9]{4}$")


def test_generate_ticket_code_format() -> None:
    assert TICKET_CODE_RE.match(generate_ticket_code())


def test_generate_ticket_code_uses_last_six_digits_of_timestamp() -> None:
    code = generate_ticket_code(now_ms=1_735_689_600_123)

    assert code.startswith("TICKET-600123-")


def test_generate_ticket_code_pads_short_timestamps() -> None:
    assert generate_ticket_code(now_ms=42).startswith("TICKET-000042-")


@pytest.mark.django_db
def test_get_ticket_url_uses_frontend_base_url() -> None:
    site_settings = SiteSettings.get_solo()
    site_settings.frontend_base_url = "https://club.example.com/"

    assert (
        get_ticket_url("TICKET-123456-AB12", site_settings=site_settings)
        == "https://club.example.com/my-tickets/TICKET-123456-AB12"
    )


@pytest.mark.django_db
def test_make_ticket_qr_png_is_png() -> None:
    assert make_ticket_qr_png("TICKET-123456-AB12").startswith(b"\x89PNG\r\n\x1a\n")
