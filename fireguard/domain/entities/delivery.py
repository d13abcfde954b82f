"""Transient results produced while delivering notifications."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class DeliveryChannel(str, enum.Enum):
    EMAIL = "email"
    PUSH = "push"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of a single delivery attempt to one recipient or endpoint."""

    channel: DeliveryChannel
    recipient_ref: str
    success: bool
    permanent_failure: bool = False
    error: str | None = None

    @classmethod
    def delivered(cls, channel: DeliveryChannel, recipient_ref: str) -> "DeliveryOutcome":
        return cls(channel=channel, recipient_ref=recipient_ref, success=True)

    @classmethod
    def failed(
        cls,
        channel: DeliveryChannel,
        recipient_ref: str,
        error: str,
        *,
        permanent: bool = False,
    ) -> "DeliveryOutcome":
        return cls(
            channel=channel,
            recipient_ref=recipient_ref,
            success=False,
            permanent_failure=permanent,
            error=error,
        )


@dataclass(frozen=True)
class DispatchSummary:
    """Aggregate counters for a fan-out call."""

    sent: int = 0
    failed: int = 0
    removed: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[DeliveryOutcome]) -> "DispatchSummary":
        sent = failed = removed = 0
        for outcome in outcomes:
            if outcome.success:
                sent += 1
                continue
            failed += 1
            if outcome.permanent_failure:
                removed += 1
        return cls(sent=sent, failed=failed, removed=removed)


__all__ = ["DeliveryChannel", "DeliveryOutcome", "DispatchSummary"]
