from django.conf import settings
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers.events import EventController
from events.controllers.moderation import ModerationController
from events.controllers.registration import RegistrationController
from events.controllers.reminders import ReminderController
from events.controllers.tickets import TicketController

from .exception_handlers import EXCEPTION_HANDLERS

api = NinjaExtraAPI(
    title="Rnd Club Backend API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Rnd Club API {settings.VERSION}",
    app_name=f"rndclub-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Meta"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Backend release currently serving requests."""
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Meta"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    return 200, ResponseOk()


api.register_controllers(
    EventController,
    RegistrationController,
    TicketController,
    ModerationController,
    ReminderController,
)

for exception_class, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exception_class, handler)
