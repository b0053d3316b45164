import typing as t

from django.core.management.base import BaseCommand, CommandError

from common.utils import mail_is_configured
from events.service.reminder_service import EventReminderService


class Command(BaseCommand):
    """Run one reminder pass from the command line, e.g. from a system cron job."""

    help = "Email approved attendees of events starting in 24-25 hours and in 1-2 hours"

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Execute the send_event_reminders command.

        Raises:
            CommandError: If no mail credentials are configured.
        """
        if not mail_is_configured():
            raise CommandError("Missing email credentials. Set EMAIL_HOST_USER and EMAIL_HOST_PASSWORD.")
        result = EventReminderService().run()
        self.stdout.write(
            self.style.SUCCESS(
                f"Reminders: {result.events_24h} event(s) in the 24h window, {result.events_1h} in the 1h window, "
                f"{result.emails_sent} email(s) sent, {result.emails_failed} failed."
            )
        )
