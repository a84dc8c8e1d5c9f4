"""Decode raw EventSub session messages into classified, typed results.

The event body of a notification carries no type tag of its own. The
subscription type stated in the envelope is authoritative: it selects the
payload shape directly. Only when no usable hint exists, or the hinted shape
rejects the payload, are the shapes tried in ``EVENT_TRIAL_ORDER``; the first
one whose required fields all validate wins.

Decoding is pure; one decoder can be shared by any number of tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..errors.eventsub import NotificationDecodeError
from ..logs import logger
from ..subscriptions.catalog import lookup
from .envelope import MessagePhase, SessionEnvelope
from .events import EVENT_TRIAL_ORDER, EVENT_TYPES_BY_KIND, EventPayload


@dataclass(frozen=True)
class ClassifiedMessage:
    """A decoded session message.

    Attributes:
        phase: Lifecycle phase from ``metadata.message_type``.
        envelope: The full decoded envelope.
        event: Typed event payload, set for NOTIFICATION messages only.
    """

    phase: MessagePhase
    envelope: SessionEnvelope
    event: EventPayload | None = None

    @property
    def session_id(self) -> str | None:
        return self.envelope.session_id


def _try_decode(cls: type[EventPayload], raw_event: Mapping[str, Any]) -> EventPayload | None:
    try:
        return cls.model_validate(raw_event)
    except ValidationError:
        return None


def matching_event_types(
    raw_event: Mapping[str, Any],
    candidates: Sequence[type[EventPayload]] = EVENT_TRIAL_ORDER,
) -> list[type[EventPayload]]:
    """Every shape in ``candidates`` that accepts ``raw_event``, in order."""
    return [cls for cls in candidates if _try_decode(cls, raw_event) is not None]


class NotificationDecoder:
    """Classifies session messages and resolves notification payloads.

    Args:
        trial_order: Shapes tried, in order, when no hint selects one.
    """

    def __init__(
        self, trial_order: Sequence[type[EventPayload]] = EVENT_TRIAL_ORDER
    ) -> None:
        self._trial_order = tuple(trial_order)

    def decode_envelope(self, raw: str | bytes) -> SessionEnvelope:
        """Parse a raw message into a SessionEnvelope.

        Raises:
            NotificationDecodeError: If ``raw`` is not a JSON object of the
                envelope shape.
        """
        try:
            return SessionEnvelope.model_validate_json(raw)
        except ValidationError as e:
            logger.log_event(
                "notification", "envelope_invalid", level=logging.WARNING, errors=e.error_count()
            )
            raise NotificationDecodeError(
                f"Invalid EventSub envelope: {e.errors()[0]['msg']}",
                operation_type="decode_envelope",
            ) from e

    def classify(self, raw: str | bytes) -> ClassifiedMessage:
        """Decode ``raw`` and resolve its event when it is a notification.

        Unknown message types are returned as UNKNOWN with no event, never
        as an error.

        Raises:
            NotificationDecodeError: On an invalid envelope, a notification
                without an event, or an event matching no known shape.
        """
        envelope = self.decode_envelope(raw)
        phase = envelope.phase
        if phase is not MessagePhase.NOTIFICATION:
            if phase is MessagePhase.UNKNOWN:
                logger.log_event(
                    "notification",
                    "unknown_type",
                    level=logging.DEBUG,
                    message_type=envelope.metadata.message_type,
                )
            return ClassifiedMessage(phase=phase, envelope=envelope)

        raw_event = envelope.payload.event if envelope.payload else None
        if raw_event is None:
            raise NotificationDecodeError(
                f"Notification {envelope.metadata.message_id} has no event payload",
                operation_type="decode_event",
            )
        event = self.resolve_event(raw_event, envelope.subscription_hint())
        return ClassifiedMessage(phase=phase, envelope=envelope, event=event)

    def resolve_event(
        self, raw_event: Mapping[str, Any], hint: str | None = None
    ) -> EventPayload:
        """Resolve ``raw_event`` to exactly one payload shape.

        Args:
            raw_event: The ``payload.event`` object.
            hint: Subscription wire tag stated by the envelope, if any.

        Raises:
            NotificationDecodeError: If no shape accepts the payload.
        """
        hinted_cls = None
        if hint:
            kind = lookup(hint)
            hinted_cls = EVENT_TYPES_BY_KIND.get(kind) if kind else None
        if hinted_cls is not None:
            event = _try_decode(hinted_cls, raw_event)
            if event is not None:
                return event

        event = self.trial_decode(raw_event)
        if event is None:
            raise NotificationDecodeError(
                f"Event payload for {hint or 'unknown subscription'} matches no known shape",
                operation_type="decode_event",
            )
        if hinted_cls is not None:
            logger.log_event(
                "notification",
                "hint_disagreement",
                level=logging.WARNING,
                hint=hint,
                hinted=hinted_cls.__name__,
                decoded=type(event).__name__,
            )
        return event

    def trial_decode(self, raw_event: Mapping[str, Any]) -> EventPayload | None:
        """First shape in trial order accepting ``raw_event``, or None."""
        for cls in self._trial_order:
            event = _try_decode(cls, raw_event)
            if event is not None:
                return event
        return None
