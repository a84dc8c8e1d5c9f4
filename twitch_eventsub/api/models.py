from __future__ import annotations

from pydantic import BaseModel


class SendMessage(BaseModel):
    broadcaster_id: str
    sender_id: str
    message: str
    reply_parent_message_id: str | None = None


class TimeoutRequestData(BaseModel):
    user_id: str
    duration: int
    reason: str


class SendTimeoutRequest(BaseModel):
    data: TimeoutRequestData
