"""Aggregate application use cases."""

from .notifications import (
    list_user_subscriptions,
    notify_low_stock,
    notify_subscription_alert,
    send_custom_notification,
    send_test_notification,
    subscribe_user,
    unsubscribe_endpoint,
)
from .reminders import ReminderCheck

__all__ = [
    "ReminderCheck",
    "list_user_subscriptions",
    "notify_low_stock",
    "notify_subscription_alert",
    "send_custom_notification",
    "send_test_notification",
    "subscribe_user",
    "unsubscribe_endpoint",
]
