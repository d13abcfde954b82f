"""Fan notifications out to every push endpoint of a user or tenant."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache

import anyio
from anyio import to_thread

from fireguard.config import get_settings
from fireguard.domain.entities import (
    DeliveryChannel,
    DeliveryOutcome,
    DispatchSummary,
    NotificationPayload,
    PushSubscription,
)
from fireguard.infrastructure.push import PushSender, get_push_sender

from .subscription_store import SubscriptionStore, get_subscription_store

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Deliver one notification to many push endpoints with isolated failures.

    Sends to distinct endpoints run concurrently and the aggregate is returned
    only after every attempt has resolved. A ``410 Gone`` response deletes the
    subscription; any other failure leaves it in place for the next attempt.
    Nothing is retried within a call.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        push_sender: PushSender,
        *,
        max_concurrency: int = 10,
    ) -> None:
        self._store = store
        self._push_sender = push_sender
        self._limiter = anyio.CapacityLimiter(max_concurrency)

    @property
    def store(self) -> SubscriptionStore:
        return self._store

    def is_enabled(self) -> bool:
        return self._push_sender.is_configured()

    async def send_to_user(self, user_id: int, payload: NotificationPayload) -> DispatchSummary:
        """Send ``payload`` to every subscription registered by ``user_id``."""

        if not self.is_enabled():
            logger.debug("Push disabled; notification for user %s dropped", user_id)
            return DispatchSummary()

        subscriptions = await to_thread.run_sync(
            self._store.list_by_user, user_id, limiter=self._limiter
        )
        if not subscriptions:
            logger.info("No push subscriptions found for user %s", user_id)
            return DispatchSummary()
        return await self._fan_out(subscriptions, payload)

    async def send_to_tenant(self, tenant_id: int, payload: NotificationPayload) -> DispatchSummary:
        """Send ``payload`` to every subscription registered under ``tenant_id``."""

        if not self.is_enabled():
            logger.debug("Push disabled; notification for tenant %s dropped", tenant_id)
            return DispatchSummary()

        subscriptions = await to_thread.run_sync(
            self._store.list_by_tenant, tenant_id, limiter=self._limiter
        )
        if not subscriptions:
            logger.info("No push subscriptions found for tenant %s", tenant_id)
            return DispatchSummary()
        return await self._fan_out(subscriptions, payload)

    async def _fan_out(
        self, subscriptions: Sequence[PushSubscription], payload: NotificationPayload
    ) -> DispatchSummary:
        outcomes: list[DeliveryOutcome] = []

        async def attempt(subscription: PushSubscription) -> None:
            outcomes.append(await self._deliver(subscription, payload))

        async with anyio.create_task_group() as task_group:
            for subscription in subscriptions:
                task_group.start_soon(attempt, subscription)

        summary = DispatchSummary.from_outcomes(outcomes)
        logger.info(
            "Push notifications: %s sent, %s failed, %s removed",
            summary.sent,
            summary.failed,
            summary.removed,
        )
        return summary

    async def _deliver(
        self, subscription: PushSubscription, payload: NotificationPayload
    ) -> DeliveryOutcome:
        try:
            outcome = await to_thread.run_sync(
                self._push_sender.send, subscription, payload, limiter=self._limiter
            )
        except Exception as exc:
            logger.exception("Push send to %s crashed", subscription.short_endpoint())
            return DeliveryOutcome.failed(DeliveryChannel.PUSH, subscription.endpoint, str(exc))

        try:
            if outcome.success:
                if subscription.id is not None:
                    await to_thread.run_sync(
                        self._store.touch, subscription.id, limiter=self._limiter
                    )
                logger.debug("Notification sent to %s", subscription.short_endpoint())
            elif outcome.permanent_failure:
                logger.warning(
                    "Subscription expired, removing: %s", subscription.short_endpoint()
                )
                await to_thread.run_sync(
                    self._store.delete_by_endpoint, subscription.endpoint, limiter=self._limiter
                )
            else:
                logger.warning(
                    "Failed to send notification to %s: %s",
                    subscription.short_endpoint(),
                    outcome.error,
                )
        except Exception:
            logger.exception(
                "Could not update push subscription %s after delivery",
                subscription.short_endpoint(),
            )
        return outcome


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher wired from settings."""

    return NotificationDispatcher(
        get_subscription_store(),
        get_push_sender(),
        max_concurrency=get_settings().max_concurrent_deliveries,
    )


__all__ = ["NotificationDispatcher", "get_notification_dispatcher"]
