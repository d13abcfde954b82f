"""Push notification use cases."""

from .events import (
    notify_low_stock,
    notify_subscription_alert,
    send_custom_notification,
    send_test_notification,
)
from .subscriptions import list_user_subscriptions, subscribe_user, unsubscribe_endpoint

__all__ = [
    "notify_low_stock",
    "notify_subscription_alert",
    "send_custom_notification",
    "send_test_notification",
    "list_user_subscriptions",
    "subscribe_user",
    "unsubscribe_endpoint",
]
