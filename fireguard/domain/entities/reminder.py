"""Domain types describing deadline reminders."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .extinguisher import Extinguisher
    from .user import User


class DeadlineKind(str, enum.Enum):
    """Deadline fields of an extinguisher that produce reminders."""

    INSPECTION = "inspection"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class ReminderPolicy:
    """Fixed set of day offsets before a deadline at which reminders are due."""

    kind: DeadlineKind
    offsets: frozenset[int]

    def __post_init__(self) -> None:
        if not self.offsets:
            raise ValueError("A reminder policy needs at least one day offset")
        if any(offset <= 0 for offset in self.offsets):
            raise ValueError("Reminder day offsets must be positive")

    @classmethod
    def for_days(cls, kind: DeadlineKind, days: Iterable[int]) -> "ReminderPolicy":
        return cls(kind=kind, offsets=frozenset(int(day) for day in days))

    @property
    def max_offset(self) -> int:
        return max(self.offsets)

    def matches(self, days_until_due: int) -> bool:
        """Return ``True`` when ``days_until_due`` is exactly one of the offsets."""

        return days_until_due in self.offsets


DEFAULT_INSPECTION_POLICY = ReminderPolicy.for_days(DeadlineKind.INSPECTION, (30, 14, 7, 1))
DEFAULT_MAINTENANCE_POLICY = ReminderPolicy.for_days(DeadlineKind.MAINTENANCE, (60, 30, 14, 7))


@dataclass
class ReminderCandidate:
    """Extinguisher with an upcoming deadline and the users to remind."""

    extinguisher: "Extinguisher"
    company_name: str
    recipients: list["User"] = field(default_factory=list)


@dataclass
class ReminderTickReport:
    """Totals accumulated while running one reminder tick."""

    kind: DeadlineKind
    run_date: date
    assets_considered: int = 0
    assets_qualifying: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    push_sent: int = 0
    push_failed: int = 0
    email_skipped: bool = False
    push_skipped: bool = False
    aborted: bool = False
    skipped_reason: str | None = None


__all__ = [
    "DeadlineKind",
    "ReminderPolicy",
    "DEFAULT_INSPECTION_POLICY",
    "DEFAULT_MAINTENANCE_POLICY",
    "ReminderCandidate",
    "ReminderTickReport",
]
