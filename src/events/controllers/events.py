from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.authentication import AuthProviderJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.schema import ErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.models.event import EventQuerySet
from events.service import event_service


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventController(UserAwareController):
    @route.get("/", url_name="list_events", response=PaginatedResponseSchema[schema.EventRetrieveSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_events(self, past: bool = False) -> EventQuerySet:
        """Browse approved events.

        Upcoming events come soonest first. Pass `past=true` to browse events that already started, most recent first.
        """
        return event_service.list_events(past=past)

    @route.post(
        "/propose",
        url_name="propose_event",
        auth=AuthProviderJWTAuth(),
        response={201: schema.EventRetrieveSchema, 400: ErrorResponse},
        throttle=WriteThrottle(),
    )
    def propose_event(self, payload: schema.EventProposalSchema) -> tuple[int, models.Event]:
        """Propose a new event.

        The event is created as pending and shows up in listings once a moderator approves it.
        Title and start time are required.
        """
        data = payload.model_dump()
        event = event_service.propose_event(
            self.identity(),
            title=data.pop("title"),
            start_time=data.pop("start_time"),
            **data,
        )
        return 201, event

    @route.get(
        "/{slug}",
        url_name="get_event",
        response={200: schema.EventRetrieveSchema, 404: ErrorResponse},
    )
    def get_event(self, slug: str) -> models.Event:
        """Retrieve an approved event by its slug."""
        return event_service.get_event(slug)
