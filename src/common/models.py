import gzip
import typing as t
import uuid

from django.conf import settings
from django.db import models
from simple_history.models import HistoricalRecords
from solo.models import SingletonModel


class TimeStampedModel(models.Model):
    """UUID-keyed base model that validates itself on every save."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        self.full_clean()
        super().save(*args, **kwargs)


class SiteSettings(SingletonModel):
    """Runtime switches editable from the admin."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    live_emails = models.BooleanField(
        default=False,
        help_text="When off, every outgoing email is rerouted to the internal catch-all address.",
    )
    frontend_base_url = models.URLField(
        default=settings.FRONTEND_BASE_URL,
        help_text="Base URL of the web frontend. Ticket QR codes point to <base>/my-tickets/<ticket code>.",
    )
    internal_catchall_email = models.EmailField(
        verbose_name="Internal Catchall Email",
        help_text="Receives rerouted mail while live emails are off.",
        default=settings.INTERNAL_CATCHALL_EMAIL,
    )

    history = HistoricalRecords()

    def __str__(self) -> str:  # pragma: no cover
        return "Site Settings"

    class Meta:
        verbose_name = "Site Settings"
        verbose_name_plural = "Site Settings"


def _pack(text: str) -> bytes:
    return gzip.compress(text.encode())


def _unpack(blob: bytes | memoryview | None) -> str | None:
    return gzip.decompress(bytes(blob)).decode() if blob else None


class EmailLog(TimeStampedModel):
    """One delivered message. Bodies are stored gzipped and dropped by the cleanup task."""

    to = models.EmailField(db_index=True)
    subject = models.TextField(db_index=True)
    sent_at = models.DateTimeField(auto_now_add=True, db_index=True)
    test_only = models.BooleanField(default=False, db_index=True)
    compressed_body = models.BinaryField(null=True, blank=True)
    compressed_html = models.BinaryField(null=True, blank=True)

    def set_body(self, body: str) -> None:
        self.compressed_body = _pack(body)

    def set_html(self, html_body: str) -> None:
        self.compressed_html = _pack(html_body)

    @property
    def body(self) -> str | None:
        return _unpack(self.compressed_body)

    @property
    def html(self) -> str | None:
        return _unpack(self.compressed_html)

    def __str__(self) -> str:
        return f"{self.subject} -> {self.to}"

    class Meta:
        indexes = [
            models.Index(fields=["to", "sent_at", "test_only"], name="ix_emaillog_to_sentat_testonly"),
        ]
