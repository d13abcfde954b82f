"""Daily cron jobs that run the deadline reminder checks."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime, tzinfo
from functools import lru_cache

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from fireguard.application.use_cases.reminders import ReminderCheck, policies_from_settings
from fireguard.config import get_settings
from fireguard.domain.entities import DeadlineKind, ReminderTickReport
from fireguard.infrastructure.email import get_email_sender
from fireguard.infrastructure.notifications import get_notification_dispatcher
from fireguard.infrastructure.repositories import DeadlineCandidateQuery
from fireguard.utils import get_app_timezone, local_date, now_in_app_timezone

logger = logging.getLogger(__name__)

JOB_IDS = {
    DeadlineKind.INSPECTION: "inspection_reminders",
    DeadlineKind.MAINTENANCE: "maintenance_reminders",
}


class ReminderScheduler:
    """Run one :class:`ReminderCheck` per deadline kind on a cron schedule.

    Each kind has its own ``idle``/``running`` state. A tick that starts while
    the same kind is still running is dropped rather than queued; the two kinds
    never block each other. Manual triggers go through the same path as the
    cron jobs.
    """

    def __init__(
        self,
        checks: Mapping[DeadlineKind, ReminderCheck],
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
        timezone: tzinfo | None = None,
        inspection_cron: str = "0 9 * * *",
        maintenance_cron: str = "30 9 * * *",
    ) -> None:
        self._checks = dict(checks)
        self._clock = clock
        self._timezone = timezone or get_app_timezone()
        self._crons = {
            DeadlineKind.INSPECTION: inspection_cron,
            DeadlineKind.MAINTENANCE: maintenance_cron,
        }
        self._running: set[DeadlineKind] = set()
        self._lock = threading.Lock()
        self._last_reports: dict[DeadlineKind, ReminderTickReport] = {}
        self.scheduler = AsyncIOScheduler(timezone=self._timezone)
        self._configured = False
        self._stopping = False

    def configure_jobs(self) -> None:
        if self._configured:
            return
        jobs = {
            DeadlineKind.INSPECTION: self.check_inspection_reminders,
            DeadlineKind.MAINTENANCE: self.check_maintenance_reminders,
        }
        for kind, job in jobs.items():
            if kind not in self._checks:
                continue
            self.scheduler.add_job(
                job,
                CronTrigger.from_crontab(self._crons[kind], timezone=self._timezone),
                id=JOB_IDS[kind],
                name=f"Check {kind.value} reminders",
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            logger.info("Scheduled %s reminders with cron '%s'", kind.value, self._crons[kind])
        self._configured = True

    def start(self) -> None:
        self.configure_jobs()
        if not self.scheduler.running:
            self._stopping = False
            self.scheduler.start()
            logger.info("Reminder scheduler started")

    def shutdown(self) -> None:
        # AsyncIOScheduler stops on the next loop iteration, so `running`
        # stays true for a moment after shutdown is requested.
        if self._stopping or not self.scheduler.running:
            return
        self._stopping = True
        self.scheduler.shutdown(wait=False)
        logger.info("Reminder scheduler stopped")

    def is_running(self, kind: DeadlineKind) -> bool:
        with self._lock:
            return kind in self._running

    def last_report(self, kind: DeadlineKind) -> ReminderTickReport | None:
        return self._last_reports.get(kind)

    async def check_inspection_reminders(self) -> ReminderTickReport | None:
        return await self._run(DeadlineKind.INSPECTION)

    async def check_maintenance_reminders(self) -> ReminderTickReport | None:
        return await self._run(DeadlineKind.MAINTENANCE)

    async def trigger_inspection_reminders_now(self) -> ReminderTickReport | None:
        logger.info("Manually triggering inspection reminder check")
        return await self.check_inspection_reminders()

    async def trigger_maintenance_reminders_now(self) -> ReminderTickReport | None:
        logger.info("Manually triggering maintenance reminder check")
        return await self.check_maintenance_reminders()

    async def _run(self, kind: DeadlineKind) -> ReminderTickReport | None:
        check = self._checks.get(kind)
        if check is None:
            raise ValueError(f"No reminder check registered for {kind.value}")

        with self._lock:
            if kind in self._running:
                logger.warning("%s reminder check already running; tick skipped", kind.value)
                return None
            self._running.add(kind)

        try:
            report = await check.run(local_date(self._clock()))
        finally:
            with self._lock:
                self._running.discard(kind)

        self._last_reports[kind] = report
        return report


def build_reminder_checks() -> dict[DeadlineKind, ReminderCheck]:
    """Wire one :class:`ReminderCheck` per deadline kind from settings."""

    from fireguard.infrastructure.database import SessionLocal

    settings = get_settings()
    candidates = DeadlineCandidateQuery(SessionLocal, settings.privileged_roles)
    dispatcher = get_notification_dispatcher()
    email_sender = get_email_sender()
    dashboard_url = f"{settings.frontend_url.rstrip('/')}/dashboard"
    return {
        kind: ReminderCheck(
            policy,
            candidates,
            dispatcher,
            email_sender,
            dashboard_url=dashboard_url,
            max_concurrency=settings.max_concurrent_deliveries,
        )
        for kind, policy in policies_from_settings(settings).items()
    }


@lru_cache
def get_reminder_scheduler() -> ReminderScheduler:
    settings = get_settings()
    return ReminderScheduler(
        build_reminder_checks(),
        inspection_cron=settings.inspection_reminder_cron,
        maintenance_cron=settings.maintenance_reminder_cron,
    )


__all__ = [
    "JOB_IDS",
    "ReminderScheduler",
    "build_reminder_checks",
    "get_reminder_scheduler",
]
