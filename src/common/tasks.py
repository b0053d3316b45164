"""Outgoing mail and email log housekeeping."""

import typing as t
from dataclasses import dataclass
from datetime import timedelta
from email.mime.image import MIMEImage

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils import timezone

from common.models import EmailLog, SiteSettings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InlineImage:
    """An image embedded in an HTML body and referenced as ``cid:<content_id>``."""

    content_id: str
    filename: str
    content: bytes
    subtype: str = "png"


def _log_delivery(recipients: list[str], subject: str, body: str, html_body: str | None) -> None:
    logs = []
    for recipient in recipients:
        log = EmailLog(to=recipient, subject=subject)
        log.set_body(body)
        if html_body:
            log.set_html(html_body)
        logs.append(log)
    EmailLog.objects.bulk_create(logs)


def deliver_email(
    *,
    to: str | list[str],
    subject: str,
    body: str,
    html_body: str | None = None,
    inline_images: t.Sequence[InlineImage] = (),
) -> None:
    """Send an email synchronously and record one EmailLog row per recipient.

    Backend errors propagate; callers decide whether a failed send is fatal.
    """
    site_settings = SiteSettings.get_solo()
    addresses = [to] if isinstance(to, str) else list(to)
    recipients = [to_safe_email_address(address, site_settings=site_settings) for address in addresses]
    message = EmailMultiAlternatives(subject=subject, body=body, from_email=settings.DEFAULT_FROM_EMAIL, to=recipients)
    if html_body:
        message.attach_alternative(html_body, "text/html")
    if inline_images:
        # cid: references only resolve inside multipart/related
        message.mixed_subtype = "related"
        for image in inline_images:
            part = MIMEImage(image.content, _subtype=image.subtype)
            part.add_header("Content-ID", f"<{image.content_id}>")
            part.add_header("Content-Disposition", "inline", filename=image.filename)
            message.attach(part)
    message.send(fail_silently=False)
    _log_delivery(recipients, subject, body, html_body)


@shared_task(name="common.cleanup_email_logs")
def cleanup_email_logs() -> dict[str, int]:
    """Prune the email log.

    Rows past ``EMAIL_LOG_RETENTION_DAYS`` go away entirely. Rows older than a
    day keep their metadata but lose the stored bodies.
    """
    now = timezone.now()
    retention_cutoff = now - timedelta(days=settings.EMAIL_LOG_RETENTION_DAYS)
    deleted, _ = EmailLog.objects.filter(sent_at__lte=retention_cutoff).delete()
    stripped = EmailLog.objects.filter(sent_at__lte=now - timedelta(days=1), compressed_body__isnull=False).update(
        compressed_body=None, compressed_html=None
    )
    logger.info("email_logs_cleaned", deleted=deleted, stripped=stripped)
    return {"deleted": deleted, "stripped": stripped}


def to_safe_email_address(email: str, site_settings: SiteSettings | None = None) -> str:
    """Address mail should actually go to.

    With live emails off, ``ada@uni.edu`` becomes ``<catchall-user>+ada_at_uni_dot_edu@<catchall-domain>``.
    """
    site_settings = site_settings or SiteSettings.get_solo()
    if site_settings.live_emails:
        return email
    tag = email.replace("@", "_at_").replace(".", "_dot_")
    mailbox, domain = site_settings.internal_catchall_email.split("@", 1)
    return f"{mailbox}+{tag}@{domain}"
