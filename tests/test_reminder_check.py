"""Tests for a single reminder tick."""

from __future__ import annotations

from datetime import date, datetime

import anyio
import pytest

from fireguard.application.use_cases.reminders import ReminderCheck
from fireguard.domain.entities import (
    DEFAULT_INSPECTION_POLICY,
    DEFAULT_MAINTENANCE_POLICY,
    DeadlineKind,
    Extinguisher,
    ReminderCandidate,
    User,
)
from fireguard.infrastructure.notifications import NotificationDispatcher

TODAY = date(2026, 10, 19)


class StaticCandidates:
    def __init__(self, candidates=(), error: Exception | None = None) -> None:
        self.candidates = list(candidates)
        self.error = error
        self.calls: list[tuple[DeadlineKind, date, date]] = []

    def list_due(self, kind, start, end):
        self.calls.append((kind, start, end))
        if self.error is not None:
            raise self.error
        return self.candidates


def _user(user_id: int, email: str) -> User:
    return User(
        id=user_id,
        email=email,
        name=f"User {user_id}",
        tenant_id=1,
        role="admin",
        status="active",
    )


def _candidate(
    extinguisher_id: str, *, inspection: datetime | None = None, recipients=None
) -> ReminderCandidate:
    return ReminderCandidate(
        extinguisher=Extinguisher(
            id=extinguisher_id,
            location="Lobby",
            building="HQ",
            tenant_id=1,
            status="Active",
            next_inspection=inspection,
            next_maintenance=None,
        ),
        company_name="Acme",
        recipients=list(recipients or []),
    )


@pytest.fixture
def recipients():
    return [_user(1, "one@example.test"), _user(2, "two@example.test")]


def _build_check(fakes, candidates, *, email_configured=True, push_configured=True, policy=None):
    store = fakes.Store(
        [
            fakes.subscription("https://push.example/one", user_id=1, subscription_id=1),
            fakes.subscription("https://push.example/two", user_id=2, subscription_id=2),
        ]
    )
    push_sender = fakes.PushSender(configured=push_configured)
    email_sender = fakes.EmailSender(configured=email_configured)
    check = ReminderCheck(
        policy or DEFAULT_INSPECTION_POLICY,
        candidates,
        NotificationDispatcher(store, push_sender),
        email_sender,
        dashboard_url="https://app.example.test/dashboard",
    )
    return check, push_sender, email_sender


@pytest.mark.anyio
async def test_seven_days_before_deadline_notifies_every_recipient(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-7", inspection=datetime(2026, 10, 26, 9, 0), recipients=recipients)]
    )
    check, push_sender, email_sender = _build_check(fakes, candidates)

    report = await check.run(TODAY)

    assert candidates.calls == [(DeadlineKind.INSPECTION, TODAY, date(2026, 11, 18))]
    assert report.assets_qualifying == 1
    assert report.emails_sent == 2
    assert report.push_sent == 2
    assert report.emails_failed == report.push_failed == 0
    assert {recipient for recipient, _, _ in email_sender.sent} == {
        "one@example.test",
        "two@example.test",
    }
    assert all(
        subject == "URGENT: Fire Extinguisher Inspection Due in 7 Days"
        for _, subject, _ in email_sender.sent
    )
    tags = {payload.tag for _, payload in push_sender.calls}
    assert tags == {"inspection-EXT-7"}



def test_check_built_outside_event_loop_runs_later(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-7", inspection=datetime(2026, 10, 26, 9, 0), recipients=recipients)]
    )
    check, _, email_sender = _build_check(fakes, candidates)

    report = anyio.run(check.run, TODAY)

    assert report.emails_sent == 2
    assert len(email_sender.sent) == 2


@pytest.mark.anyio
async def test_days_between_thresholds_send_nothing(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-8", inspection=datetime(2026, 10, 27, 9, 0), recipients=recipients)]
    )
    check, push_sender, email_sender = _build_check(fakes, candidates)

    report = await check.run(TODAY)

    assert report.assets_considered == 1
    assert report.assets_qualifying == 0
    assert email_sender.attempts == 0
    assert push_sender.calls == []


@pytest.mark.anyio
async def test_tick_summary_log_reports_totals(fakes, recipients, caplog):
    candidates = StaticCandidates(
        [
            _candidate("EXT-7", inspection=datetime(2026, 10, 26, 9, 0), recipients=recipients),
            _candidate("EXT-8", inspection=datetime(2026, 10, 27, 9, 0), recipients=recipients),
        ]
    )
    check, _, _ = _build_check(fakes, candidates)

    with caplog.at_level("INFO"):
        await check.run(TODAY)

    assert (
        "Inspection reminders complete: 2 assets considered, 1 assets due, "
        "2 emails sent (0 failed), 2 push sent (0 failed)"
    ) in caplog.text


@pytest.mark.anyio
async def test_email_unconfigured_skips_smtp_but_still_pushes(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-7", inspection=datetime(2026, 10, 26), recipients=recipients)]
    )
    check, push_sender, email_sender = _build_check(fakes, candidates, email_configured=False)

    report = await check.run(TODAY)

    assert report.email_skipped is True
    assert email_sender.attempts == 0
    assert report.emails_sent == report.emails_failed == 0
    assert report.push_sent == 2
    assert len(push_sender.calls) == 2


@pytest.mark.anyio
async def test_no_channel_configured_short_circuits(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-7", inspection=datetime(2026, 10, 26), recipients=recipients)]
    )
    check, _, _ = _build_check(
        fakes, candidates, email_configured=False, push_configured=False
    )

    report = await check.run(TODAY)

    assert report.skipped_reason == "No delivery channel configured"
    assert candidates.calls == []


@pytest.mark.anyio
async def test_candidate_query_failure_aborts_tick(fakes, caplog):
    candidates = StaticCandidates(error=RuntimeError("database unavailable"))
    check, push_sender, email_sender = _build_check(fakes, candidates)

    with caplog.at_level("ERROR"):
        report = await check.run(TODAY)

    assert report.aborted is True
    assert email_sender.attempts == 0
    assert push_sender.calls == []
    assert "Could not load inspection reminder candidates" in caplog.text


@pytest.mark.anyio
async def test_candidates_without_recipients_are_skipped(fakes):
    candidates = StaticCandidates([_candidate("EXT-1", inspection=datetime(2026, 10, 20))])
    check, push_sender, email_sender = _build_check(fakes, candidates)

    report = await check.run(TODAY)

    assert report.assets_qualifying == 0
    assert email_sender.attempts == 0
    assert push_sender.calls == []


@pytest.mark.anyio
async def test_failures_in_one_channel_do_not_block_the_other(fakes, recipients):
    candidates = StaticCandidates(
        [_candidate("EXT-7", inspection=datetime(2026, 10, 26), recipients=recipients)]
    )
    check, push_sender, email_sender = _build_check(fakes, candidates)
    email_sender.failing.add("one@example.test")
    push_sender.responses["https://push.example/two"] = 503

    report = await check.run(TODAY)

    assert report.emails_sent == 1
    assert report.emails_failed == 1
    assert report.push_sent == 1
    assert report.push_failed == 1


@pytest.mark.anyio
async def test_maintenance_window_uses_largest_threshold(fakes):
    candidates = StaticCandidates()
    check, _, _ = _build_check(fakes, candidates, policy=DEFAULT_MAINTENANCE_POLICY)

    report = await check.run(TODAY)

    assert report.kind is DeadlineKind.MAINTENANCE
    assert candidates.calls == [(DeadlineKind.MAINTENANCE, TODAY, date(2026, 12, 18))]
