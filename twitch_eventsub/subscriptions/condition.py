"""Condition and subscription construction per subscription kind."""

from __future__ import annotations

from dataclasses import dataclass

from . import catalog
from .catalog import AnyKind, CustomSubscription, SubscriptionKind
from .models import Condition, EventSubscription, Transport


@dataclass(frozen=True)
class AccountIds:
    """Account identifiers available to the caller.

    Typically a single broadcaster account acts as moderator and user too, so
    both default to the broadcaster id.
    """

    broadcaster_id: str
    moderator_id: str | None = None
    user_id: str | None = None

    @property
    def moderator(self) -> str:
        return self.moderator_id or self.broadcaster_id

    @property
    def user(self) -> str:
        return self.user_id or self.broadcaster_id


# Condition field -> account role that fills it.
_FIELD_ROLES = {
    "broadcaster_user_id": "broadcaster_id",
    "to_broadcaster_user_id": "broadcaster_id",
    "moderator_user_id": "moderator",
    "user_id": "user",
}


def build_condition(kind: AnyKind, account_ids: AccountIds) -> Condition:
    """Build a fresh Condition holding only the fields ``kind`` requires.

    Args:
        kind: Catalog kind or custom subscription.
        account_ids: Identifiers used to fill the condition fields.

    Returns:
        A new Condition. For a CustomSubscription its own condition is returned
        unchanged.
    """
    if isinstance(kind, CustomSubscription):
        return kind.condition
    values = {
        field: getattr(account_ids, _FIELD_ROLES[field])
        for field in catalog.CATALOG[kind].condition_fields
    }
    return Condition(**values)


def build_subscription(
    kind: AnyKind, account_ids: AccountIds, session_id: str
) -> EventSubscription:
    """Build the subscription request body for ``kind`` on a websocket session.

    Raises:
        ValueError: If ``kind`` is permission-only and has no wire tag.
    """
    if not catalog.is_subscribable(kind):
        name = kind.value if isinstance(kind, SubscriptionKind) else repr(kind)
        raise ValueError(f"{name} is not a subscribable event kind")
    return EventSubscription(
        wire_tag=catalog.tag(kind),
        version=catalog.version(kind),
        condition=build_condition(kind, account_ids),
        transport=Transport(session_id=session_id),
    )
