"""Registry of push subscriptions grouped by user and tenant."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from fireguard.domain.entities import PushSubscription
from fireguard.infrastructure.repositories import PushSubscriptionRepository
from fireguard.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class SubscriptionStore:
    """Persistence facade over :class:`PushSubscriptionRepository`.

    Each operation runs in its own short-lived session so the store can be used
    from several worker threads at once. All writes are scoped to a single row.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def upsert_by_endpoint(
        self,
        *,
        user_id: int,
        tenant_id: int,
        endpoint: str,
        p256dh: str,
        auth: str,
        device_name: str | None = None,
    ) -> PushSubscription:
        """Create the subscription or refresh the row already holding ``endpoint``."""

        subscription = PushSubscription(
            id=None,
            user_id=user_id,
            tenant_id=tenant_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            device_name=device_name,
            last_used=now_in_app_timezone(),
        )
        with self._session_factory() as session:
            repository = PushSubscriptionRepository(session)
            if repository.get_by_endpoint(endpoint) is not None:
                return repository.update(subscription)
            try:
                return repository.create(subscription)
            except IntegrityError:
                # Another request registered the same endpoint first.
                session.rollback()
                return repository.update(subscription)

    def delete_by_endpoint(self, endpoint: str) -> bool:
        with self._session_factory() as session:
            deleted = PushSubscriptionRepository(session).delete_by_endpoint(endpoint)
        if deleted:
            logger.info("Removed push subscription %s", endpoint[:50])
        return deleted

    def list_by_user(self, user_id: int) -> Sequence[PushSubscription]:
        with self._session_factory() as session:
            return PushSubscriptionRepository(session).list_for_user(user_id)

    def list_by_tenant(self, tenant_id: int) -> Sequence[PushSubscription]:
        with self._session_factory() as session:
            return PushSubscriptionRepository(session).list_for_tenant(tenant_id)

    def touch(self, subscription_id: int, when: datetime | None = None) -> bool:
        with self._session_factory() as session:
            return PushSubscriptionRepository(session).touch(subscription_id, when)


@lru_cache
def get_subscription_store() -> SubscriptionStore:
    """Return the store bound to the application session factory."""

    from fireguard.infrastructure.database import SessionLocal

    return SubscriptionStore(SessionLocal)


__all__ = ["SubscriptionStore", "get_subscription_store"]
