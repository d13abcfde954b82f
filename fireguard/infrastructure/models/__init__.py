"""ORM models used by the application infrastructure."""

from .tenant import TenantModel
from .user import UserModel
from .extinguisher import ExtinguisherModel
from .push_subscription import PushSubscriptionModel

__all__ = [
    "TenantModel",
    "UserModel",
    "ExtinguisherModel",
    "PushSubscriptionModel",
]
