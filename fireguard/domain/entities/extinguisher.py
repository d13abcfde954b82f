"""Domain entity representing a fire extinguisher asset."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .reminder import DeadlineKind

EXTINGUISHER_STATUS_ACTIVE = "Active"


@dataclass
class Extinguisher:
    """Asset whose inspection and maintenance deadlines trigger reminders."""

    id: str
    location: str
    building: str
    tenant_id: int
    status: str
    next_inspection: datetime | None = None
    next_maintenance: datetime | None = None

    def is_active(self) -> bool:
        return self.status == EXTINGUISHER_STATUS_ACTIVE

    def deadline_for(self, kind: DeadlineKind) -> datetime | None:
        """Return the deadline tracked for ``kind``."""

        if kind is DeadlineKind.INSPECTION:
            return self.next_inspection
        return self.next_maintenance

    @property
    def label(self) -> str:
        return f"{self.building} - {self.location}"


__all__ = ["Extinguisher", "EXTINGUISHER_STATUS_ACTIVE"]
