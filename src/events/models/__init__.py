from .event import Event
from .registration import EventRegistration

__all__ = [
    "Event",
    "EventRegistration",
]
