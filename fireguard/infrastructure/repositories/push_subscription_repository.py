"""Persistence helpers for push subscription entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from fireguard.domain.entities import PushSubscription
from fireguard.infrastructure.models import PushSubscriptionModel
from fireguard.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class PushSubscriptionRepository:
    """Provide CRUD operations for :class:`PushSubscription` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_endpoint(self, endpoint: str) -> PushSubscription | None:
        model = self._get_model_by_endpoint(endpoint)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[PushSubscription]:
        query = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id == user_id)
            .order_by(
                PushSubscriptionModel.last_used.desc(), PushSubscriptionModel.id.desc()
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_tenant(self, tenant_id: int) -> Sequence[PushSubscription]:
        query = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.tenant_id == tenant_id)
            .order_by(PushSubscriptionModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, subscription: PushSubscription) -> PushSubscription:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        model = PushSubscriptionModel()
        self._apply_entity_to_model(model, subscription)
        model.created_at = ensure_app_naive_datetime(subscription.created_at) or now
        model.last_used = ensure_app_naive_datetime(subscription.last_used) or now
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, subscription: PushSubscription) -> PushSubscription:
        model = self._get_model_by_endpoint(subscription.endpoint)
        if model is None:
            msg = f"Push subscription for endpoint {subscription.endpoint} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, subscription)
        model.last_used = ensure_app_naive_datetime(
            subscription.last_used or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def touch(self, subscription_id: int, when: datetime | None = None) -> bool:
        """Refresh ``last_used`` for ``subscription_id``; ``False`` when missing."""

        updated = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.id == subscription_id)
            .update(
                {
                    PushSubscriptionModel.last_used: ensure_app_naive_datetime(
                        when or now_in_app_timezone()
                    )
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def delete_by_endpoint(self, endpoint: str) -> bool:
        deleted = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.endpoint == endpoint)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def _get_model_by_endpoint(self, endpoint: str) -> PushSubscriptionModel | None:
        return (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.endpoint == endpoint)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: PushSubscriptionModel, subscription: PushSubscription
    ) -> None:
        model.user_id = subscription.user_id
        model.tenant_id = subscription.tenant_id
        model.endpoint = subscription.endpoint
        model.p256dh = subscription.p256dh
        model.auth = subscription.auth
        if subscription.device_name is not None:
            model.device_name = subscription.device_name

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            user_id=model.user_id,
            tenant_id=model.tenant_id,
            endpoint=model.endpoint,
            p256dh=model.p256dh,
            auth=model.auth,
            device_name=model.device_name,
            created_at=ensure_app_timezone(model.created_at),
            last_used=ensure_app_timezone(model.last_used),
        )


__all__ = ["PushSubscriptionRepository"]
