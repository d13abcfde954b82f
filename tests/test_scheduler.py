"""Tests for the reminder scheduler state machine and job wiring."""

from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

import anyio
import pytest

from fireguard.domain.entities import DeadlineKind, ReminderTickReport
from fireguard.infrastructure.scheduler import JOB_IDS, ReminderScheduler


class RecordingCheck:
    def __init__(self, kind: DeadlineKind, *, block: bool = False) -> None:
        self.kind = kind
        self.runs: list[date] = []
        self.started = anyio.Event()
        self.release = anyio.Event()
        self.block = block

    async def run(self, today: date) -> ReminderTickReport:
        self.runs.append(today)
        self.started.set()
        if self.block:
            await self.release.wait()
        return ReminderTickReport(kind=self.kind, run_date=today)


class VirtualClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _scheduler(checks, clock=None) -> ReminderScheduler:
    return ReminderScheduler(
        {check.kind: check for check in checks},
        clock=clock or VirtualClock(datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)),
        timezone=timezone.utc,
    )


@pytest.mark.anyio
async def test_tick_uses_the_injected_clock():
    check = RecordingCheck(DeadlineKind.INSPECTION)
    clock = VirtualClock(datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))
    scheduler = _scheduler([check], clock)

    await scheduler.check_inspection_reminders()
    clock.now = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)
    report = await scheduler.trigger_inspection_reminders_now()

    assert check.runs == [date(2026, 10, 19), date(2026, 10, 20)]
    assert report.run_date == date(2026, 10, 20)
    assert scheduler.last_report(DeadlineKind.INSPECTION) is report


@pytest.mark.anyio
async def test_overlapping_tick_is_skipped_not_queued(caplog):
    check = RecordingCheck(DeadlineKind.INSPECTION, block=True)
    scheduler = _scheduler([check])
    results = []

    async def first_tick():
        results.append(await scheduler.check_inspection_reminders())

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(first_tick)
        await check.started.wait()

        assert scheduler.is_running(DeadlineKind.INSPECTION)
        assert await scheduler.trigger_inspection_reminders_now() is None

        check.release.set()

    assert len(check.runs) == 1
    assert results[0] is not None
    assert not scheduler.is_running(DeadlineKind.INSPECTION)
    assert "already running" in caplog.text


@pytest.mark.anyio
async def test_triggers_run_independently():
    inspection = RecordingCheck(DeadlineKind.INSPECTION, block=True)
    maintenance = RecordingCheck(DeadlineKind.MAINTENANCE)
    scheduler = _scheduler([inspection, maintenance])

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(scheduler.check_inspection_reminders)
        await inspection.started.wait()

        report = await scheduler.check_maintenance_reminders()

        inspection.release.set()

    assert report is not None
    assert report.kind is DeadlineKind.MAINTENANCE


def test_cron_jobs_are_registered_from_crontab_strings():
    scheduler = ReminderScheduler(
        {
            DeadlineKind.INSPECTION: SimpleNamespace(kind=DeadlineKind.INSPECTION),
            DeadlineKind.MAINTENANCE: SimpleNamespace(kind=DeadlineKind.MAINTENANCE),
        },
        timezone=timezone.utc,
        inspection_cron="0 9 * * *",
        maintenance_cron="30 9 * * *",
    )

    scheduler.configure_jobs()
    jobs = {job.id: job for job in scheduler.scheduler.get_jobs()}

    assert set(jobs) == set(JOB_IDS.values())
    inspection_trigger = str(jobs["inspection_reminders"].trigger)
    maintenance_trigger = str(jobs["maintenance_reminders"].trigger)
    assert "hour='9'" in inspection_trigger and "minute='0'" in inspection_trigger
    assert "minute='30'" in maintenance_trigger
    assert jobs["inspection_reminders"].max_instances == 1


@pytest.mark.anyio
async def test_start_and_shutdown():
    scheduler = _scheduler([RecordingCheck(DeadlineKind.INSPECTION)])

    scheduler.start()
    assert scheduler.scheduler.running
    assert [job.id for job in scheduler.scheduler.get_jobs()] == ["inspection_reminders"]

    scheduler.shutdown()
    await _until_stopped(scheduler)
    assert not scheduler.scheduler.running


@pytest.mark.anyio
async def test_repeated_shutdown_is_harmless():
    scheduler = _scheduler([RecordingCheck(DeadlineKind.INSPECTION)])

    scheduler.start()
    scheduler.shutdown()
    scheduler.shutdown()
    await _until_stopped(scheduler)
    scheduler.shutdown()

    assert not scheduler.scheduler.running


async def _until_stopped(scheduler: ReminderScheduler) -> None:
    # AsyncIOScheduler applies shutdown on a later loop iteration.
    for _ in range(10):
        if not scheduler.scheduler.running:
            return
        await anyio.sleep(0)
