"""Tenant-wide and account-level push notifications."""

from __future__ import annotations

import logging

from fireguard.domain.entities import (
    DispatchSummary,
    LowStockNotification,
    NotificationPayload,
    SubscriptionAlertNotification,
    TestNotification,
)
from fireguard.infrastructure.notifications import NotificationDispatcher
from fireguard.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


async def notify_low_stock(
    dispatcher: NotificationDispatcher,
    tenant_id: int,
    *,
    part_name: str,
    quantity_in_stock: int,
    min_stock_level: int,
) -> DispatchSummary:
    """Warn every device of ``tenant_id`` that a spare part is running out."""

    notification = LowStockNotification(
        part_name=part_name,
        quantity_in_stock=quantity_in_stock,
        min_stock_level=min_stock_level,
    )
    summary = await dispatcher.send_to_tenant(tenant_id, notification.to_payload())
    logger.info(
        "Low stock alert for %s sent to tenant %s (%s delivered)",
        part_name,
        tenant_id,
        summary.sent,
    )
    return summary


async def notify_subscription_alert(
    dispatcher: NotificationDispatcher,
    user_id: int,
    message: str,
    level: str = "info",
) -> DispatchSummary:
    # ``to_payload`` rejects unknown levels before anything is sent.
    payload = SubscriptionAlertNotification(message=message, level=level).to_payload()
    return await dispatcher.send_to_user(user_id, payload)


async def send_test_notification(
    dispatcher: NotificationDispatcher, user_id: int
) -> DispatchSummary:
    payload = TestNotification(sent_at=now_in_app_timezone()).to_payload()
    return await dispatcher.send_to_user(user_id, payload)


async def send_custom_notification(
    dispatcher: NotificationDispatcher, user_id: int, payload: NotificationPayload
) -> DispatchSummary:
    return await dispatcher.send_to_user(user_id, payload)


__all__ = [
    "notify_low_stock",
    "notify_subscription_alert",
    "send_test_notification",
    "send_custom_notification",
]
