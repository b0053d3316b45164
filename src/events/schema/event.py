"""Event-related schemas."""

from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field

from common.schema import StrippedString
from events.models import Event


class OrganizerSchema(Schema):
    id: UUID
    display_name: str
    avatar_url: str = ""


class EventRetrieveSchema(ModelSchema):
    organizer: OrganizerSchema | None = None
    display_location: str

    class Meta:
        model = Event
        fields = [
            "id",
            "title",
            "slug",
            "description",
            "requirements",
            "event_type",
            "location_type",
            "location",
            "start_time",
            "end_time",
            "registration_link",
            "image_url",
            "status",
        ]


class EventProposalSchema(Schema):
    # Title and start time are validated by the service so the caller gets the usual error message.
    title: StrippedString = ""
    start_time: AwareDatetime | None = None
    end_time: AwareDatetime | None = None
    description: StrippedString = ""
    requirements: StrippedString = ""
    event_type: Event.EventType = Event.EventType.OTHER
    location_type: Event.LocationType = Event.LocationType.PHYSICAL
    location: StrippedString = Field("", max_length=512)
    registration_link: StrippedString = Field("", max_length=1024)
    image_url: StrippedString = Field("", max_length=1024)


class EventModerationSchema(Schema):
    id: UUID
    slug: str
    status: Event.EventStatus
