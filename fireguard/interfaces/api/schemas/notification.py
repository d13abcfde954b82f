"""Pydantic models describing push subscription payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class SubscribeRequest(BaseModel):
    """Browser ``PushSubscription`` JSON plus an optional device label."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str = Field(..., min_length=1, max_length=700)
    keys: SubscriptionKeys
    device_name: str | None = Field(default=None, alias="deviceName", max_length=255)


class UnsubscribeRequest(BaseModel):
    endpoint: str = Field(..., min_length=1)


class PushSubscriptionRead(BaseModel):
    """Stored subscription fields safe to return to the client."""

    id: int
    endpoint: str
    device_name: str | None = None
    created_at: datetime | None = None
    last_used: datetime | None = None


class DispatchSummaryRead(BaseModel):
    sent: int
    failed: int


class PublicKeyRead(BaseModel):
    public_key: str
    enabled: bool


class NotificationSendRequest(BaseModel):
    """Custom notification content sent to the caller's devices."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=1000)
    icon: str | None = None
    badge: str | None = None
    tag: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    require_interaction: bool = Field(default=False, alias="requireInteraction")


__all__ = [
    "SubscriptionKeys",
    "SubscribeRequest",
    "UnsubscribeRequest",
    "PushSubscriptionRead",
    "DispatchSummaryRead",
    "PublicKeyRead",
    "NotificationSendRequest",
]
