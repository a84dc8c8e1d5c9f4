"""Static catalog of EventSub subscription kinds.

Maps every modelled kind to its wire tag, required OAuth scope, payload
version and the condition fields Twitch requires for it. The table is built
once at import and never written to.

Scopes of kinds needing several permissions are ``+``-joined in a fixed
order, so scopes of many kinds can be joined and deduplicated safely.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .models import Condition


class SubscriptionKind(str, Enum):
    """Closed set of subscription kinds known to the client."""

    USER_UPDATE = "user_update"
    CHANNEL_FOLLOW = "channel_follow"
    CHAT_MESSAGE = "chat_message"
    CHANNEL_RAID = "channel_raid"
    CHANNEL_POINTS_CUSTOM_REWARD_REDEEM = "channel_points_custom_reward_redeem"
    CHANNEL_POINTS_AUTO_REWARD_REDEEM = "channel_points_auto_reward_redeem"
    CHANNEL_SUBSCRIBE = "channel_subscribe"
    CHANNEL_SUBSCRIPTION_GIFT = "channel_subscription_gift"
    CHANNEL_SUBSCRIPTION_MESSAGE = "channel_subscription_message"
    CHANNEL_CHEER = "channel_cheer"
    POLL_BEGIN = "poll_begin"
    POLL_PROGRESS = "poll_progress"
    POLL_END = "poll_end"
    PREDICTION_BEGIN = "prediction_begin"
    PREDICTION_PROGRESS = "prediction_progress"
    PREDICTION_LOCK = "prediction_lock"
    PREDICTION_END = "prediction_end"
    HYPE_TRAIN_BEGIN = "hype_train_begin"
    HYPE_TRAIN_PROGRESS = "hype_train_progress"
    HYPE_TRAIN_END = "hype_train_end"
    SHOUTOUT_CREATE = "shoutout_create"
    SHOUTOUT_RECEIVE = "shoutout_receive"
    BAN_TIMEOUT_USER = "ban_timeout_user"
    DELETE_MESSAGE = "delete_message"
    AD_BREAK_BEGIN = "ad_break_begin"


@dataclass(frozen=True)
class CatalogEntry:
    tag: str
    scope: str
    version: str
    condition_fields: tuple[str, ...]


@dataclass(frozen=True)
class CustomSubscription:
    """A vendor subscription kind the catalog does not model.

    Carries its own wire tag, scope and version; its condition is used as is.
    """

    tag: str
    scope: str
    version: str
    condition: Condition


AnyKind = SubscriptionKind | CustomSubscription

_BROADCASTER = ("broadcaster_user_id",)
_BROADCASTER_MODERATOR = ("broadcaster_user_id", "moderator_user_id")

K = SubscriptionKind
CATALOG: dict[SubscriptionKind, CatalogEntry] = {
    K.USER_UPDATE: CatalogEntry("user.update", "", "1", ("user_id",)),
    K.CHANNEL_FOLLOW: CatalogEntry(
        "channel.follow", "moderator:read:followers", "2", _BROADCASTER_MODERATOR
    ),
    K.CHAT_MESSAGE: CatalogEntry(
        "channel.chat.message",
        "user:read:chat+user:write:chat",
        "1",
        ("broadcaster_user_id", "user_id"),
    ),
    K.CHANNEL_RAID: CatalogEntry("channel.raid", "", "1", ("to_broadcaster_user_id",)),
    K.CHANNEL_POINTS_CUSTOM_REWARD_REDEEM: CatalogEntry(
        "channel.channel_points_custom_reward_redemption.add",
        "channel:read:redemptions",
        "1",
        _BROADCASTER,
    ),
    K.CHANNEL_POINTS_AUTO_REWARD_REDEEM: CatalogEntry(
        "channel.channel_points_automatic_reward_redemption.add",
        "channel:read:redemptions",
        "1",
        _BROADCASTER,
    ),
    K.CHANNEL_SUBSCRIBE: CatalogEntry(
        "channel.subscribe", "channel:read:subscriptions", "1", _BROADCASTER
    ),
    K.CHANNEL_SUBSCRIPTION_GIFT: CatalogEntry(
        "channel.subscription.gift", "channel:read:subscriptions", "1", _BROADCASTER
    ),
    K.CHANNEL_SUBSCRIPTION_MESSAGE: CatalogEntry(
        "channel.subscription.message", "channel:read:subscriptions", "1", _BROADCASTER
    ),
    K.CHANNEL_CHEER: CatalogEntry("channel.cheer", "bits:read", "1", _BROADCASTER),
    K.POLL_BEGIN: CatalogEntry("channel.poll.begin", "channel:read:polls", "1", _BROADCASTER),
    K.POLL_PROGRESS: CatalogEntry(
        "channel.poll.progress", "channel:read:polls", "1", _BROADCASTER
    ),
    K.POLL_END: CatalogEntry("channel.poll.end", "channel:read:polls", "1", _BROADCASTER),
    K.PREDICTION_BEGIN: CatalogEntry(
        "channel.prediction.begin", "channel:read:predictions", "1", _BROADCASTER
    ),
    K.PREDICTION_PROGRESS: CatalogEntry(
        "channel.prediction.progress", "channel:read:predictions", "1", _BROADCASTER
    ),
    K.PREDICTION_LOCK: CatalogEntry(
        "channel.prediction.lock", "channel:read:predictions", "1", _BROADCASTER
    ),
    K.PREDICTION_END: CatalogEntry(
        "channel.prediction.end", "channel:read:predictions", "1", _BROADCASTER
    ),
    K.HYPE_TRAIN_BEGIN: CatalogEntry(
        "channel.hype_train.begin", "channel:read:hype_train", "1", _BROADCASTER
    ),
    K.HYPE_TRAIN_PROGRESS: CatalogEntry(
        "channel.hype_train.progress", "channel:read:hype_train", "1", _BROADCASTER
    ),
    K.HYPE_TRAIN_END: CatalogEntry(
        "channel.hype_train.end", "channel:read:hype_train", "1", _BROADCASTER
    ),
    K.SHOUTOUT_CREATE: CatalogEntry(
        "channel.shoutout.create", "moderator:read:shoutouts", "1", _BROADCASTER_MODERATOR
    ),
    K.SHOUTOUT_RECEIVE: CatalogEntry(
        "channel.shoutout.receive", "moderator:read:shoutouts", "1", _BROADCASTER_MODERATOR
    ),
    # Permission-only: scopes for the moderation Helix calls, nothing to subscribe to.
    K.BAN_TIMEOUT_USER: CatalogEntry("", "moderator:manage:banned_users", "1", ()),
    K.DELETE_MESSAGE: CatalogEntry("", "moderator:manage:chat_messages", "1", ()),
    K.AD_BREAK_BEGIN: CatalogEntry("channel.ad_break.begin", "channel:read:ads", "1", _BROADCASTER),
}
del K

# First kind wins should two kinds ever share a tag.
_BY_TAG: dict[str, SubscriptionKind] = {}
for _kind, _entry in CATALOG.items():
    if _entry.tag:
        _BY_TAG.setdefault(_entry.tag, _kind)


def tag(kind: AnyKind) -> str:
    if isinstance(kind, CustomSubscription):
        return kind.tag
    return CATALOG[kind].tag


def required_scope(kind: AnyKind) -> str:
    if isinstance(kind, CustomSubscription):
        return kind.scope
    return CATALOG[kind].scope


def version(kind: AnyKind) -> str:
    if isinstance(kind, CustomSubscription):
        return kind.version
    return CATALOG[kind].version


def condition_fields(kind: AnyKind) -> frozenset[str]:
    """Condition fields the kind populates.

    For a CustomSubscription this is whatever its own condition sets.
    """
    if isinstance(kind, CustomSubscription):
        return kind.condition.populated_fields()
    return frozenset(CATALOG[kind].condition_fields)


def is_subscribable(kind: AnyKind) -> bool:
    return bool(tag(kind))


def lookup(wire_tag: str) -> SubscriptionKind | None:
    """Return the kind whose wire tag matches exactly, or None."""
    return _BY_TAG.get(wire_tag)


def scopes_for(kinds: Iterable[AnyKind]) -> str:
    """Join the scopes required by ``kinds`` with ``+``.

    Empty scopes are skipped and each individual scope appears once, in the
    order it was first seen.
    """
    seen: dict[str, None] = {}
    for kind in kinds:
        scope = required_scope(kind)
        for part in scope.split("+"):
            if part:
                seen.setdefault(part, None)
    return "+".join(seen)


__all__ = [
    "SubscriptionKind",
    "CustomSubscription",
    "CatalogEntry",
    "AnyKind",
    "CATALOG",
    "tag",
    "required_scope",
    "version",
    "condition_fields",
    "is_subscribable",
    "lookup",
    "scopes_for",
]
