"""Manual triggers and status for the deadline reminder jobs."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from fireguard.config import Settings, get_settings
from fireguard.domain.entities import DeadlineKind, ReminderTickReport, User
from fireguard.infrastructure.email import EmailSender, get_email_sender
from fireguard.infrastructure.push import PushSender, get_push_sender
from fireguard.infrastructure.scheduler import ReminderScheduler, get_reminder_scheduler
from fireguard.interfaces.api.dependencies import require_privileged
from fireguard.interfaces.api.schemas import (
    ChannelStatusRead,
    ReminderScheduleRead,
    ReminderStatusRead,
    ReminderTickReportRead,
)

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _report_to_schema(report: ReminderTickReport) -> ReminderTickReportRead:
    values = asdict(report)
    values["kind"] = report.kind.value
    return ReminderTickReportRead(**values)


def _ensure_report(report: ReminderTickReport | None, kind: DeadlineKind) -> ReminderTickReportRead:
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"The {kind.value} reminder check is already running",
        )
    return _report_to_schema(report)


@router.post("/inspections/run", response_model=ReminderTickReportRead)
async def run_inspection_reminders(
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
    current_user: User = Depends(require_privileged),
) -> ReminderTickReportRead:
    """Run the inspection reminder check immediately."""

    report = await scheduler.trigger_inspection_reminders_now()
    return _ensure_report(report, DeadlineKind.INSPECTION)


@router.post("/maintenance/run", response_model=ReminderTickReportRead)
async def run_maintenance_reminders(
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
    current_user: User = Depends(require_privileged),
) -> ReminderTickReportRead:
    """Run the maintenance reminder check immediately."""

    report = await scheduler.trigger_maintenance_reminders_now()
    return _ensure_report(report, DeadlineKind.MAINTENANCE)


@router.get("/status", response_model=ReminderStatusRead)
def get_reminder_status(
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
    email_sender: EmailSender = Depends(get_email_sender),
    push_sender: PushSender = Depends(get_push_sender),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(require_privileged),
) -> ReminderStatusRead:
    def schedule(kind: DeadlineKind, cron: str, days: list[int]) -> ReminderScheduleRead:
        last = scheduler.last_report(kind)
        return ReminderScheduleRead(
            cron=cron,
            days=days,
            running=scheduler.is_running(kind),
            last_report=_report_to_schema(last) if last else None,
        )

    return ReminderStatusRead(
        email=ChannelStatusRead(**email_sender.configuration_status()),
        push=ChannelStatusRead(**push_sender.configuration_status()),
        scheduler_running=scheduler.scheduler.running,
        inspection=schedule(
            DeadlineKind.INSPECTION,
            settings.inspection_reminder_cron,
            list(settings.inspection_reminder_days),
        ),
        maintenance=schedule(
            DeadlineKind.MAINTENANCE,
            settings.maintenance_reminder_cron,
            list(settings.maintenance_reminder_days),
        ),
    )
