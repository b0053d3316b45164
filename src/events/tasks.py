"""Celery tasks for events."""

import structlog
from celery import shared_task

from common.utils import mail_is_configured
from events.service.reminder_service import EventReminderService

logger = structlog.get_logger(__name__)


@shared_task(name="events.send_event_reminders")
def send_event_reminders() -> dict[str, int]:
    """Run one reminder pass. Scheduled hourly by celery beat."""
    if not mail_is_configured():
        logger.warning("event_reminders_skipped", reason="no_credentials")
        return {"events_24h": 0, "events_1h": 0, "emails_sent": 0, "emails_failed": 0}
    return EventReminderService().run().as_dict()
