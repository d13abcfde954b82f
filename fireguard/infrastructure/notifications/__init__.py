"""Push subscription registry and notification fan-out."""

from .dispatcher import NotificationDispatcher, get_notification_dispatcher
from .subscription_store import SubscriptionStore, get_subscription_store

__all__ = [
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "SubscriptionStore",
    "get_subscription_store",
]
