"""Repository implementations for infrastructure layer."""

from .extinguisher_repository import DeadlineCandidateQuery, ExtinguisherRepository
from .push_subscription_repository import PushSubscriptionRepository
from .user_repository import UserRepository

__all__ = [
    "DeadlineCandidateQuery",
    "ExtinguisherRepository",
    "PushSubscriptionRepository",
    "UserRepository",
]
