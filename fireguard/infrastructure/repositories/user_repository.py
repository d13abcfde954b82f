"""Read access to users owned by the account service."""

from __future__ import annotations

from sqlalchemy.orm import Session

from fireguard.domain.entities import User
from fireguard.infrastructure.models import UserModel


class UserRepository:
    """Look up user entities; this service never mutates them."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            tenant_id=model.tenant_id,
            role=model.role,
            status=model.status,
        )


__all__ = ["UserRepository"]
