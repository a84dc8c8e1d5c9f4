from .decoder import ClassifiedMessage, NotificationDecoder, matching_event_types
from .envelope import MessagePhase, Metadata, Payload, Session, SessionEnvelope, SubscriptionInfo
from .events import EVENT_TRIAL_ORDER, EVENT_TYPES_BY_KIND, Event, EventPayload

__all__ = [
    "ClassifiedMessage",
    "NotificationDecoder",
    "matching_event_types",
    "MessagePhase",
    "Metadata",
    "Payload",
    "Session",
    "SessionEnvelope",
    "SubscriptionInfo",
    "EVENT_TRIAL_ORDER",
    "EVENT_TYPES_BY_KIND",
    "Event",
    "EventPayload",
]
