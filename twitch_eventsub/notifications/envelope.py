"""Envelope models for messages received on an EventSub websocket session."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from ..subscriptions.catalog import SubscriptionKind, lookup
from ..subscriptions.models import Condition


class MessagePhase(str, Enum):
    """Lifecycle phase of a session message, from ``metadata.message_type``."""

    WELCOME = "session_welcome"
    KEEPALIVE = "session_keepalive"
    NOTIFICATION = "notification"
    UNKNOWN = "unknown"

    @classmethod
    def from_message_type(cls, message_type: str) -> MessagePhase:
        """Exact-match ``message_type``; anything unrecognised is UNKNOWN."""
        if message_type == cls.UNKNOWN.value:
            return cls.UNKNOWN
        try:
            return cls(message_type)
        except ValueError:
            return cls.UNKNOWN


class Metadata(BaseModel):
    message_id: str
    message_type: str
    message_timestamp: str
    subscription_type: str | None = None
    subscription_version: str | None = None


class Session(BaseModel):
    id: str
    status: str
    connected_at: str
    keepalive_timeout_seconds: int | None = None
    reconnect_url: str | None = None
    recovery_url: str | None = None


class SubscriptionInfo(BaseModel):
    id: str
    status: str | None = None
    type: str
    version: str
    cost: int
    condition: Condition | None = None
    transport: dict[str, Any] | None = None
    created_at: str


class Payload(BaseModel):
    session: Session | None = None
    subscription: SubscriptionInfo | None = None
    # Resolved to a typed payload by NotificationDecoder.
    event: dict[str, Any] | None = None


class SessionEnvelope(BaseModel):
    metadata: Metadata
    payload: Payload | None = None
    subscription_type: str | None = None
    subscription_version: str | None = None

    @property
    def phase(self) -> MessagePhase:
        return MessagePhase.from_message_type(self.metadata.message_type)

    @property
    def session_id(self) -> str | None:
        if self.payload and self.payload.session:
            return self.payload.session.id
        return None

    def subscription_hint(self) -> str | None:
        """Wire tag of the subscription this message belongs to, if stated anywhere."""
        if self.metadata.subscription_type:
            return self.metadata.subscription_type
        if self.subscription_type:
            return self.subscription_type
        if self.payload and self.payload.subscription:
            return self.payload.subscription.type
        return None

    def subscription_kind(self) -> SubscriptionKind | None:
        hint = self.subscription_hint()
        return lookup(hint) if hint else None
