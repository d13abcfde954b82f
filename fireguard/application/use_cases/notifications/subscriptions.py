"""Register and remove the push endpoints of a user."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fireguard.domain.entities import PushSubscription, User
from fireguard.infrastructure.notifications import SubscriptionStore

logger = logging.getLogger(__name__)


def subscribe_user(
    store: SubscriptionStore,
    user: User,
    *,
    endpoint: str,
    p256dh: str,
    auth: str,
    device_name: str | None = None,
) -> PushSubscription:
    """Save ``endpoint`` for ``user``, replacing whatever row held it before."""

    endpoint = endpoint.strip()
    if not endpoint:
        raise ValueError("Subscription endpoint is required")
    if not p256dh or not auth:
        raise ValueError("Subscription keys are required")

    subscription = store.upsert_by_endpoint(
        user_id=user.id,
        tenant_id=user.tenant_id,
        endpoint=endpoint,
        p256dh=p256dh,
        auth=auth,
        device_name=device_name,
    )
    logger.info("User %s subscribed %s", user.id, subscription.short_endpoint())
    return subscription


def unsubscribe_endpoint(store: SubscriptionStore, endpoint: str) -> bool:
    """Remove ``endpoint``; unknown endpoints are not an error."""

    return store.delete_by_endpoint(endpoint)


def list_user_subscriptions(store: SubscriptionStore, user: User) -> Sequence[PushSubscription]:
    return store.list_by_user(user.id)


__all__ = ["subscribe_user", "unsubscribe_endpoint", "list_user_subscriptions"]
