from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone
from freezegun import freeze_time

from common.models import EmailLog, SiteSettings
from common.tasks import InlineImage, cleanup_email_logs, deliver_email, to_safe_email_address

pytestmark = pytest.mark.django_db


@pytest.fixture
def live_emails() -> SiteSettings:
    site_settings = SiteSettings.get_solo()
    site_settings.live_emails = True
    site_settings.save()
    return site_settings


def test_to_safe_email_address_rewrites_outside_live() -> None:
    site_settings = SiteSettings.get_solo()
    site_settings.internal_catchall_email = "catchall@club.test"

    assert (
        to_safe_email_address("ada@example.com", site_settings=site_settings)
        == "catchall+ada_at_example_dot_com@club.test"
    )


def test_to_safe_email_address_passthrough_when_live(live_emails: SiteSettings) -> None:
    assert to_safe_email_address("ada@example.com", site_settings=live_emails) == "ada@example.com"


@pytest.mark.usefixtures("live_emails")
class TestDeliverEmail:
    def test_plain_email_is_sent_and_logged(self) -> None:
        deliver_email(to="ada@example.com", subject="Hello", body="Plain body")

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["ada@example.com"]
        assert mail.outbox[0].subject == "Hello"
        log = EmailLog.objects.get()
        assert log.to == "ada@example.com"
        assert log.body == "Plain body"
        assert log.html is None

    def test_inline_image_is_attached_as_related_part(self) -> None:
        image = InlineImage(content_id="ticket-qr-code", filename="ticket-qr.png", content=b"\x89PNG fake")

        deliver_email(
            to=["ada@example.com"],
            subject="Ticket",
            body="See attached",
            html_body='<img src="cid:ticket-qr-code">',
            inline_images=[image],
        )

        message = mail.outbox[0].message()
        assert message.get_content_subtype() == "related"
        parts = [part for part in message.walk() if part.get("Content-ID")]
        assert len(parts) == 1
        assert parts[0]["Content-ID"] == "<ticket-qr-code>"
        assert parts[0].get_content_type() == "image/png"
        assert parts[0].get_filename() == "ticket-qr.png"
        assert EmailLog.objects.get().html == '<img src="cid:ticket-qr-code">'


def test_deliver_email_goes_to_catchall_outside_live() -> None:
    deliver_email(to="ada@example.com", subject="Hello", body="Body")

    assert mail.outbox[0].to == ["internal+ada_at_example_dot_com@example.com"]


def test_cleanup_email_logs() -> None:
    """Old rows are deleted and bodies of rows older than a day are dropped."""
    with freeze_time(timezone.now() - timedelta(days=120)):
        ancient = EmailLog(to="a@example.com", subject="Ancient")
        ancient.set_body("old")
        ancient.save()
    with freeze_time(timezone.now() - timedelta(days=2)):
        recent = EmailLog(to="b@example.com", subject="Recent")
        recent.set_body("keep the row, drop the body")
        recent.save()
    fresh = EmailLog(to="c@example.com", subject="Fresh")
    fresh.set_body("untouched")
    fresh.save()

    result = cleanup_email_logs()

    assert result == {"deleted": 1, "stripped": 1}
    assert not EmailLog.objects.filter(pk=ancient.pk).exists()
    recent.refresh_from_db()
    assert recent.body is None
    fresh.refresh_from_db()
    assert fresh.body == "untouched"
