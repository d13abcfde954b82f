"""Pydantic models describing reminder runs."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class ReminderTickReportRead(BaseModel):
    """Totals of one reminder check."""

    kind: str
    run_date: date
    assets_considered: int
    assets_qualifying: int
    emails_sent: int
    emails_failed: int
    push_sent: int
    push_failed: int
    email_skipped: bool
    push_skipped: bool
    aborted: bool
    skipped_reason: str | None = None


class ChannelStatusRead(BaseModel):
    configured: bool
    message: str


class ReminderScheduleRead(BaseModel):
    cron: str
    days: list[int]
    running: bool
    last_report: ReminderTickReportRead | None = None


class ReminderStatusRead(BaseModel):
    email: ChannelStatusRead
    push: ChannelStatusRead
    scheduler_running: bool
    inspection: ReminderScheduleRead
    maintenance: ReminderScheduleRead


__all__ = [
    "ReminderTickReportRead",
    "ChannelStatusRead",
    "ReminderScheduleRead",
    "ReminderStatusRead",
]
