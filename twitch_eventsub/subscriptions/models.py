"""Wire models for creating EventSub subscriptions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..constants import EVENTSUB_TRANSPORT_METHOD


class Condition(BaseModel):
    """Filter object scoping a subscription to specific accounts or entities.

    A superset of every vendor condition shape. Only the fields relevant to a
    subscription kind are set; the rest stay None and are omitted on the wire.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    moderator_user_id: str | None = None
    broadcaster_user_id: str | None = None
    reward_id: str | None = None
    from_broadcaster_user_id: str | None = None
    to_broadcaster_user_id: str | None = None
    organization_id: str | None = None
    category_id: str | None = None
    campaign_id: str | None = None
    extension_client_id: str | None = None

    def populated_fields(self) -> frozenset[str]:
        return frozenset(self.model_dump(exclude_none=True))

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class Transport(BaseModel):
    """Delivery binding of a subscription to a live websocket session."""

    model_config = ConfigDict(frozen=True)

    method: Literal["websocket"] = EVENTSUB_TRANSPORT_METHOD
    session_id: str


class EventSubscription(BaseModel):
    """Request body for ``POST /eventsub/subscriptions``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    wire_tag: str = Field(alias="type")
    version: str
    condition: Condition
    transport: Transport

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> EventSubscription:
        return cls.model_validate_json(raw)
