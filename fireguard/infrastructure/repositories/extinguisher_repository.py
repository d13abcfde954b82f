"""Read-only queries over extinguishers with upcoming deadlines."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from fireguard.domain.entities import (
    EXTINGUISHER_STATUS_ACTIVE,
    USER_STATUS_ACTIVE,
    DeadlineKind,
    Extinguisher,
    ReminderCandidate,
)
from fireguard.infrastructure.models import ExtinguisherModel, UserModel

from .user_repository import UserRepository


class ExtinguisherRepository:
    """Query extinguishers owned by external collaborators."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_with_deadline_between(
        self,
        kind: DeadlineKind,
        start: date,
        end: date,
        *,
        privileged_roles: Iterable[str],
    ) -> Sequence[ReminderCandidate]:
        """Return active extinguishers whose ``kind`` deadline falls in ``[start, end]``.

        Both bounds are calendar days in application-local time. Each candidate
        carries the active privileged users of the owning tenant.
        """

        column = _deadline_column(kind)
        lower = datetime.combine(start, time.min)
        upper = datetime.combine(end + timedelta(days=1), time.min)
        query = (
            self.session.query(ExtinguisherModel)
            .filter(ExtinguisherModel.status == EXTINGUISHER_STATUS_ACTIVE)
            .filter(column.isnot(None))
            .filter(column >= lower)
            .filter(column < upper)
            .order_by(column.asc(), ExtinguisherModel.id.asc())
        )
        models = query.all()
        if not models:
            return []

        roles = sorted({role.lower() for role in privileged_roles})
        tenant_ids = {model.tenant_id for model in models}
        recipients_by_tenant = self._recipients_by_tenant(tenant_ids, roles)

        return [
            ReminderCandidate(
                extinguisher=self._to_entity(model),
                company_name=model.tenant.company_name if model.tenant else "",
                recipients=list(recipients_by_tenant.get(model.tenant_id, [])),
            )
            for model in models
        ]

    def _recipients_by_tenant(self, tenant_ids: set[int], roles: list[str]) -> dict:
        if not roles:
            return {}
        query = (
            self.session.query(UserModel)
            .filter(UserModel.tenant_id.in_(tenant_ids))
            .filter(func.lower(UserModel.status) == USER_STATUS_ACTIVE)
            .filter(func.lower(UserModel.role).in_(roles))
            .order_by(UserModel.id.asc())
        )
        grouped: dict[int, list] = {}
        for model in query.all():
            grouped.setdefault(model.tenant_id, []).append(UserRepository._to_entity(model))
        return grouped

    @staticmethod
    def _to_entity(model: ExtinguisherModel) -> Extinguisher:
        return Extinguisher(
            id=model.id,
            location=model.location,
            building=model.building,
            tenant_id=model.tenant_id,
            status=model.status,
            next_inspection=model.next_inspection,
            next_maintenance=model.next_maintenance,
        )


class DeadlineCandidateQuery:
    """Thread-safe adapter that opens its own session for each query."""

    def __init__(self, session_factory: sessionmaker, privileged_roles: Iterable[str]) -> None:
        self._session_factory = session_factory
        self._privileged_roles = tuple(privileged_roles)

    def list_due(self, kind: DeadlineKind, start: date, end: date) -> Sequence[ReminderCandidate]:
        with self._session_factory() as session:
            return ExtinguisherRepository(session).list_with_deadline_between(
                kind, start, end, privileged_roles=self._privileged_roles
            )


def _deadline_column(kind: DeadlineKind):
    if kind is DeadlineKind.INSPECTION:
        return ExtinguisherModel.next_inspection
    return ExtinguisherModel.next_maintenance


__all__ = ["ExtinguisherRepository", "DeadlineCandidateQuery"]
