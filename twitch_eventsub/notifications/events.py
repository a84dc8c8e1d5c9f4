"""Typed EventSub notification payloads.

Every payload class is tagged with the SubscriptionKind it is delivered for.
Vendor fields not listed here are ignored, so additive schema changes do not
break decoding; required fields are what makes one shape distinguishable
from another during trial decoding.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel

from ..subscriptions.catalog import SubscriptionKind


class EventPayload(BaseModel):
    kind: ClassVar[SubscriptionKind]


class BroadcasterFields(BaseModel):
    broadcaster_user_id: str
    broadcaster_user_login: str
    broadcaster_user_name: str


class UserFields(BaseModel):
    user_id: str
    user_login: str
    user_name: str


# ---- chat ----
class Mention(BaseModel):
    user_id: str
    user_login: str
    user_name: str


class Emote(BaseModel):
    id: str
    emote_set_id: str
    owner_id: str | None = None
    format: list[str] | None = None


class Cheermote(BaseModel):
    prefix: str
    bits: int
    tier: int


class Fragment(BaseModel):
    type: str
    text: str
    cheermote: Cheermote | None = None
    emote: Emote | None = None
    mention: Mention | None = None

    def is_text(self) -> bool:
        return self.type == "text"

    def is_mention(self) -> bool:
        return self.type == "mention"


class Message(BaseModel):
    text: str
    fragments: list[Fragment]

    def get_written_message(self) -> str | None:
        """Human-readable text of the message without mentions.

        Non-mention fragments are joined by single spaces in their original
        order. Only the first one is stripped; later fragments are kept
        verbatim. Returns None when every fragment is a mention.
        """
        text: str | None = None
        for fragment in self.fragments:
            if fragment.is_mention():
                continue
            if text is None:
                text = fragment.text.strip()
            else:
                text = f"{text} {fragment.text}"
        return text


class Badge(BaseModel):
    set_id: str
    id: str
    info: str


class Cheer(BaseModel):
    bits: int


class Reply(BaseModel):
    parent_message_id: str
    parent_message_body: str
    parent_user_id: str
    parent_user_name: str
    parent_user_login: str
    thread_message_id: str
    thread_user_id: str
    thread_user_name: str
    thread_user_login: str


class ChatMessageEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHAT_MESSAGE

    chatter_user_id: str
    chatter_user_login: str
    chatter_user_name: str
    message_id: str
    message: Message
    message_type: str
    color: str
    badges: list[Badge]
    cheer: Cheer | None = None
    reply: Reply | None = None
    channel_points_custom_reward_id: str | None = None

    def get_written_message(self) -> str | None:
        return self.message.get_written_message()


# ---- raids, follows, users, shoutouts ----
class RaidEvent(EventPayload):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_RAID

    from_broadcaster_user_id: str
    from_broadcaster_user_login: str
    from_broadcaster_user_name: str
    to_broadcaster_user_id: str
    to_broadcaster_user_login: str
    to_broadcaster_user_name: str
    viewers: int


class FollowEvent(EventPayload, BroadcasterFields, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_FOLLOW

    followed_at: str


class UserUpdateEvent(EventPayload, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.USER_UPDATE

    email: str | None = None
    email_verified: bool
    description: str


class ShoutoutCreateEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.SHOUTOUT_CREATE

    to_broadcaster_user_id: str
    to_broadcaster_user_login: str
    to_broadcaster_user_name: str
    moderator_user_id: str
    moderator_user_login: str
    moderator_user_name: str
    viewer_count: int
    started_at: str
    cooldown_ends_at: str
    target_cooldown_ends_at: str


class ShoutoutReceiveEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.SHOUTOUT_RECEIVE

    from_broadcaster_user_id: str
    from_broadcaster_user_login: str
    from_broadcaster_user_name: str
    viewer_count: int
    started_at: str


# ---- channel points ----
class Reward(BaseModel):
    id: str
    title: str
    prompt: str
    cost: int


class CustomPointsRewardRedeemEvent(EventPayload, BroadcasterFields, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_POINTS_CUSTOM_REWARD_REDEEM

    id: str
    user_input: str
    status: str
    reward: Reward
    redeemed_at: str


class UnlockedEmote(BaseModel):
    id: str
    name: str


class AutoReward(BaseModel):
    type: str
    cost: int
    unlocked_emote: UnlockedEmote | None = None


class RewardMessageEmote(BaseModel):
    id: str
    begin: int
    end: int


class RewardMessage(BaseModel):
    text: str
    emotes: list[RewardMessageEmote] | None = None


class AutoRewardRedeemEvent(EventPayload, BroadcasterFields, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_POINTS_AUTO_REWARD_REDEEM

    id: str
    reward: AutoReward
    message: RewardMessage
    user_input: str | None = None
    redeemed_at: str


# ---- ads ----
class AdBreakBeginEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.AD_BREAK_BEGIN

    duration_seconds: int
    started_at: str
    is_automatic: bool
    requester_user_id: str
    requester_user_login: str
    requester_user_name: str


# ---- subscriptions and bits ----
class SubscribeEvent(EventPayload, BroadcasterFields, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_SUBSCRIBE

    tier: str
    is_gift: bool


class GiftEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_SUBSCRIPTION_GIFT

    # Null when the gift is anonymous.
    user_id: str | None
    user_login: str | None
    user_name: str | None
    total: int
    tier: str
    cumulative_total: int | None = None
    is_anonymous: bool


class SubscriptionMessageEvent(EventPayload, BroadcasterFields, UserFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_SUBSCRIPTION_MESSAGE

    tier: str
    message: RewardMessage
    cumulative_months: int
    streak_months: int | None = None
    duration_months: int


class CheerEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.CHANNEL_CHEER

    is_anonymous: bool
    user_id: str | None
    user_login: str | None
    user_name: str | None
    message: str
    bits: int


# ---- polls ----
class PollChoice(BaseModel):
    id: str
    title: str
    bits_votes: int | None = None
    channel_points_votes: int | None = None
    votes: int | None = None


class VotingSettings(BaseModel):
    is_enabled: bool
    amount_per_vote: int


class PollBeginEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.POLL_BEGIN

    id: str
    title: str
    choices: list[PollChoice]
    bits_voting: VotingSettings
    channel_points_voting: VotingSettings
    started_at: str
    ends_at: str


class PollProgressEvent(PollBeginEvent):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.POLL_PROGRESS


class PollEndEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.POLL_END

    id: str
    title: str
    choices: list[PollChoice]
    bits_voting: VotingSettings
    channel_points_voting: VotingSettings
    status: str
    started_at: str
    ended_at: str


# ---- predictions ----
class TopPredictor(BaseModel):
    user_id: str
    user_login: str
    user_name: str
    channel_points_won: int | None = None
    channel_points_used: int


class PredictionOutcome(BaseModel):
    id: str
    title: str
    color: str
    users: int | None = None
    channel_points: int | None = None
    top_predictors: list[TopPredictor] | None = None


class PredictionBeginEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.PREDICTION_BEGIN

    id: str
    title: str
    outcomes: list[PredictionOutcome]
    started_at: str
    locks_at: str


class PredictionProgressEvent(PredictionBeginEvent):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.PREDICTION_PROGRESS


class PredictionLockEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.PREDICTION_LOCK

    id: str
    title: str
    outcomes: list[PredictionOutcome]
    started_at: str
    locked_at: str


class PredictionEndEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.PREDICTION_END

    id: str
    title: str
    winning_outcome_id: str | None
    outcomes: list[PredictionOutcome]
    status: str
    started_at: str
    ended_at: str


# ---- hype trains ----
class Contribution(BaseModel):
    user_id: str
    user_login: str
    user_name: str
    type: str
    total: int


class HypeTrainBeginEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.HYPE_TRAIN_BEGIN

    id: str
    total: int
    progress: int
    goal: int
    top_contributions: list[Contribution]
    last_contribution: Contribution
    level: int
    started_at: str
    expires_at: str


class HypeTrainProgressEvent(HypeTrainBeginEvent):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.HYPE_TRAIN_PROGRESS


class HypeTrainEndEvent(EventPayload, BroadcasterFields):
    kind: ClassVar[SubscriptionKind] = SubscriptionKind.HYPE_TRAIN_END

    id: str
    level: int
    total: int
    top_contributions: list[Contribution]
    started_at: str
    ended_at: str
    cooldown_ends_at: str


Event = (
    ChatMessageEvent
    | RaidEvent
    | CustomPointsRewardRedeemEvent
    | AdBreakBeginEvent
    | SubscribeEvent
    | GiftEvent
    | SubscriptionMessageEvent
    | CheerEvent
    | AutoRewardRedeemEvent
    | PollBeginEvent
    | PollProgressEvent
    | PollEndEvent
    | PredictionBeginEvent
    | PredictionProgressEvent
    | PredictionLockEvent
    | PredictionEndEvent
    | HypeTrainBeginEvent
    | HypeTrainProgressEvent
    | HypeTrainEndEvent
    | FollowEvent
    | UserUpdateEvent
    | ShoutoutCreateEvent
    | ShoutoutReceiveEvent
)

# Structural trial order used when a notification carries no usable
# subscription type. Append new shapes at the end; never reorder.
# Progress shapes share their Begin shape's fields, so without a hint they
# decode as Begin.
EVENT_TRIAL_ORDER: tuple[type[EventPayload], ...] = (
    ChatMessageEvent,
    RaidEvent,
    CustomPointsRewardRedeemEvent,
    AdBreakBeginEvent,
    SubscribeEvent,
    GiftEvent,
    SubscriptionMessageEvent,
    CheerEvent,
    AutoRewardRedeemEvent,
    PollBeginEvent,
    PollProgressEvent,
    PollEndEvent,
    PredictionBeginEvent,
    PredictionProgressEvent,
    PredictionLockEvent,
    PredictionEndEvent,
    HypeTrainBeginEvent,
    HypeTrainProgressEvent,
    HypeTrainEndEvent,
    FollowEvent,
    UserUpdateEvent,
    ShoutoutCreateEvent,
    ShoutoutReceiveEvent,
)

EVENT_TYPES_BY_KIND: dict[SubscriptionKind, type[EventPayload]] = {
    cls.kind: cls for cls in EVENT_TRIAL_ORDER
}
