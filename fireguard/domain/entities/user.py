"""Domain entities representing tenants and their users."""

from collections.abc import Iterable
from dataclasses import dataclass

USER_STATUS_ACTIVE = "active"


@dataclass
class Tenant:
    """Company that owns users and extinguishers."""

    id: int
    company_name: str


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int
    email: str
    name: str
    tenant_id: int
    role: str
    status: str

    def is_active(self) -> bool:
        """Return ``True`` when the account can receive notifications."""

        return self.status.lower() == USER_STATUS_ACTIVE

    def has_role(self, *aliases: str) -> bool:
        """Return ``True`` when the user's role matches any of ``aliases``."""

        return self.role.lower() in {alias.lower() for alias in aliases}

    def is_privileged(self, roles: Iterable[str]) -> bool:
        """Return ``True`` for active users holding one of ``roles``."""

        return self.is_active() and self.has_role(*roles)


__all__ = ["Tenant", "User", "USER_STATUS_ACTIVE"]
