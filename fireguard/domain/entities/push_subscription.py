"""Domain entity representing a browser push subscription."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PushSubscription:
    """Web Push endpoint registered by a user's browser or device."""

    id: int | None
    user_id: int
    tenant_id: int
    endpoint: str
    p256dh: str
    auth: str
    device_name: str | None = None
    created_at: datetime | None = None
    last_used: datetime | None = None

    def subscription_info(self) -> dict[str, object]:
        """Return the structure expected by Web Push client libraries."""

        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }

    def short_endpoint(self, length: int = 50) -> str:
        """Return a truncated endpoint suitable for log messages."""

        if len(self.endpoint) <= length:
            return self.endpoint
        return f"{self.endpoint[:length]}..."


__all__ = ["PushSubscription"]
