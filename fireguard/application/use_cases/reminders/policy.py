"""Day-threshold arithmetic for deadline reminders."""

from __future__ import annotations

from datetime import date, datetime

from fireguard.config import Settings
from fireguard.domain.entities import DeadlineKind, ReminderPolicy
from fireguard.utils import local_date


def days_until_due(deadline: datetime | date, today: date) -> int:
    """Return the number of calendar days between ``today`` and ``deadline``.

    The count is a date difference in the application timezone, not a number of
    elapsed 24 hour periods, so ``1`` always means "due tomorrow".
    """

    return (local_date(deadline) - today).days


def policies_from_settings(settings: Settings) -> dict[DeadlineKind, ReminderPolicy]:
    return {
        DeadlineKind.INSPECTION: ReminderPolicy.for_days(
            DeadlineKind.INSPECTION, settings.inspection_reminder_days
        ),
        DeadlineKind.MAINTENANCE: ReminderPolicy.for_days(
            DeadlineKind.MAINTENANCE, settings.maintenance_reminder_days
        ),
    }


__all__ = ["days_until_due", "policies_from_settings"]
