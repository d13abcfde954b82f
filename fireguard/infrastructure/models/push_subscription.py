"""SQLAlchemy model for persisted push subscriptions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from fireguard.infrastructure.database import Base
from fireguard.utils import now_in_app_naive_datetime


class PushSubscriptionModel(Base):
    """Database representation of a Web Push endpoint registration."""

    __tablename__ = "push_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    endpoint = Column(String(700), nullable=False, unique=True)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    device_name = Column(String(120), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    last_used = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PushSubscriptionModel"]
