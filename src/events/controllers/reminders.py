import structlog
from ninja_extra import ControllerBase, api_controller, route

from common.authentication import CronSecretAuth
from common.schema import ErrorResponse
from common.utils import mail_is_configured
from events import schema
from events.exceptions import MailNotConfiguredError
from events.service.reminder_service import EventReminderService

logger = structlog.get_logger(__name__)


@api_controller("/reminders", auth=CronSecretAuth(), tags=["Reminders"])
class ReminderController(ControllerBase):
    @route.get("/run", url_name="run_reminders", response={200: schema.ReminderRunSchema, 500: ErrorResponse})
    def run_reminders(self) -> dict[str, int]:
        """Run one reminder pass.

        Meant for an external scheduler calling hourly with `Authorization: Bearer <CRON_SECRET>`.
        Emails approved attendees of events starting in 24-25 hours and in 1-2 hours, once per event and window.
        """
        if not mail_is_configured():
            raise MailNotConfiguredError()
        result = EventReminderService().run()
        return result.as_dict()
