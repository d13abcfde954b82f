"""Domain entities exposed by the application."""

from .delivery import DeliveryChannel, DeliveryOutcome, DispatchSummary
from .extinguisher import EXTINGUISHER_STATUS_ACTIVE, Extinguisher
from .notification import (
    InspectionDueNotification,
    LowStockNotification,
    MaintenanceDueNotification,
    Notification,
    NotificationPayload,
    SubscriptionAlertNotification,
    TestNotification,
)
from .push_subscription import PushSubscription
from .reminder import (
    DEFAULT_INSPECTION_POLICY,
    DEFAULT_MAINTENANCE_POLICY,
    DeadlineKind,
    ReminderCandidate,
    ReminderPolicy,
    ReminderTickReport,
)
from .user import USER_STATUS_ACTIVE, Tenant, User

__all__ = [
    "DeliveryChannel",
    "DeliveryOutcome",
    "DispatchSummary",
    "Extinguisher",
    "EXTINGUISHER_STATUS_ACTIVE",
    "InspectionDueNotification",
    "LowStockNotification",
    "MaintenanceDueNotification",
    "Notification",
    "NotificationPayload",
    "SubscriptionAlertNotification",
    "TestNotification",
    "PushSubscription",
    "DEFAULT_INSPECTION_POLICY",
    "DEFAULT_MAINTENANCE_POLICY",
    "DeadlineKind",
    "ReminderCandidate",
    "ReminderPolicy",
    "ReminderTickReport",
    "Tenant",
    "User",
    "USER_STATUS_ACTIVE",
]
