"""Notification payloads delivered through the push channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union

DEFAULT_ICON = "/icon-192x192.png"
DEFAULT_BADGE = "/badge-72x72.png"

AlertLevel = Literal["info", "warning", "error"]

_ALERT_ICONS: dict[str, str] = {
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
}


@dataclass(frozen=True)
class NotificationPayload:
    """Channel-agnostic notification converted to the push envelope on send."""

    title: str
    body: str
    icon: str | None = None
    badge: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    tag: str | None = None
    require_interaction: bool = False

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON envelope expected by the service worker."""

        return {
            "title": self.title,
            "body": self.body,
            "icon": self.icon or DEFAULT_ICON,
            "badge": self.badge or DEFAULT_BADGE,
            "data": dict(self.data),
            "tag": self.tag,
            "requireInteraction": self.require_interaction,
        }


@dataclass(frozen=True)
class InspectionDueNotification:
    extinguisher_id: str
    building: str
    location: str
    days_until_due: int

    def to_payload(self) -> NotificationPayload:
        return NotificationPayload(
            title="\U0001f525 Inspection Reminder",
            body=(
                f"{self.building} - {self.location} inspection due in "
                f"{_days(self.days_until_due)}"
            ),
            data={
                "type": "inspection_reminder",
                "extinguisherId": self.extinguisher_id,
                "url": f"/extinguishers/{self.extinguisher_id}",
            },
            tag=f"inspection-{self.extinguisher_id}",
            require_interaction=True,
        )


@dataclass(frozen=True)
class MaintenanceDueNotification:
    extinguisher_id: str
    building: str
    location: str
    days_until_due: int

    def to_payload(self) -> NotificationPayload:
        return NotificationPayload(
            title="\U0001f527 Maintenance Due",
            body=(
                f"{self.building} - {self.location} maintenance due in "
                f"{_days(self.days_until_due)}"
            ),
            data={
                "type": "maintenance_alert",
                "extinguisherId": self.extinguisher_id,
                "url": f"/extinguishers/{self.extinguisher_id}",
            },
            tag=f"maintenance-{self.extinguisher_id}",
            require_interaction=True,
        )


@dataclass(frozen=True)
class LowStockNotification:
    part_name: str
    quantity_in_stock: int
    min_stock_level: int

    def to_payload(self) -> NotificationPayload:
        return NotificationPayload(
            title="\U0001f4e6 Low Stock Alert",
            body=(
                f"{self.part_name}: {self.quantity_in_stock} units remaining "
                f"(min: {self.min_stock_level})"
            ),
            data={"type": "low_stock_alert", "partName": self.part_name, "url": "/inventory"},
            tag="low-stock",
        )


@dataclass(frozen=True)
class SubscriptionAlertNotification:
    message: str
    level: AlertLevel = "info"

    def to_payload(self) -> NotificationPayload:
        if self.level not in _ALERT_ICONS:
            raise ValueError(f"Unknown alert level: {self.level}")
        return NotificationPayload(
            title=f"{_ALERT_ICONS[self.level]} Subscription Alert",
            body=self.message,
            data={"type": "subscription_alert", "url": "/billing"},
            tag="subscription",
            require_interaction=self.level != "info",
        )


@dataclass(frozen=True)
class TestNotification:
    sent_at: datetime

    # Keep pytest from collecting this class.
    __test__ = False

    def to_payload(self) -> NotificationPayload:
        return NotificationPayload(
            title="\U0001f514 Test Notification",
            body="Push notifications are working correctly!",
            data={"type": "test", "timestamp": self.sent_at.isoformat()},
            tag="test",
        )


Notification = Union[
    InspectionDueNotification,
    MaintenanceDueNotification,
    LowStockNotification,
    SubscriptionAlertNotification,
    TestNotification,
]


def _days(count: int) -> str:
    return "1 day" if count == 1 else f"{count} days"


__all__ = [
    "DEFAULT_BADGE",
    "DEFAULT_ICON",
    "AlertLevel",
    "NotificationPayload",
    "InspectionDueNotification",
    "MaintenanceDueNotification",
    "LowStockNotification",
    "SubscriptionAlertNotification",
    "TestNotification",
    "Notification",
]
