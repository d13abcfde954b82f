"""Single reminder tick for one deadline kind."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Protocol

import anyio
from anyio import to_thread

from fireguard.domain.entities import (
    DeadlineKind,
    DispatchSummary,
    ReminderCandidate,
    ReminderPolicy,
    ReminderTickReport,
    User,
)
from fireguard.infrastructure.email import EmailSender
from fireguard.infrastructure.notifications import NotificationDispatcher

from .messages import build_push_notification, render_reminder_email
from .policy import days_until_due

logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    def list_due(
        self, kind: DeadlineKind, start: date, end: date
    ) -> Sequence[ReminderCandidate]: ...


class ReminderCheck:
    """Find assets sitting exactly on a reminder threshold and notify their owners.

    Push and email deliveries for every ``(asset, recipient)`` pair run
    concurrently and fail independently. The only error that stops a tick is a
    failing candidate query.
    """

    def __init__(
        self,
        policy: ReminderPolicy,
        candidate_source: CandidateSource,
        dispatcher: NotificationDispatcher,
        email_sender: EmailSender,
        *,
        dashboard_url: str,
        max_concurrency: int = 10,
    ) -> None:
        self.policy = policy
        self._candidates = candidate_source
        self._dispatcher = dispatcher
        self._email_sender = email_sender
        self._dashboard_url = dashboard_url
        self._limiter = anyio.CapacityLimiter(max_concurrency)

    @property
    def kind(self) -> DeadlineKind:
        return self.policy.kind

    async def run(self, today: date) -> ReminderTickReport:
        report = ReminderTickReport(kind=self.kind, run_date=today)
        report.email_skipped = not self._email_sender.is_configured()
        report.push_skipped = not self._dispatcher.is_enabled()

        if report.email_skipped and report.push_skipped:
            report.skipped_reason = "No delivery channel configured"
            logger.warning(
                "Skipping %s reminders: neither email nor push is configured", self.kind.value
            )
            return report
        if report.email_skipped:
            logger.warning("Email not configured; %s reminders will only use push", self.kind.value)
        if report.push_skipped:
            logger.info("Push not configured; %s reminders will only use email", self.kind.value)

        logger.info("Checking %s reminders for %s", self.kind.value, today.isoformat())
        window_end = today + timedelta(days=self.policy.max_offset)
        try:
            candidates = await to_thread.run_sync(
                self._candidates.list_due, self.kind, today, window_end
            )
        except Exception:
            logger.exception("Could not load %s reminder candidates", self.kind.value)
            report.aborted = True
            report.skipped_reason = "Candidate query failed"
            return report

        report.assets_considered = len(candidates)
        due: list[tuple[ReminderCandidate, int]] = []
        for candidate in candidates:
            deadline = candidate.extinguisher.deadline_for(self.kind)
            if deadline is None:
                continue
            days = days_until_due(deadline, today)
            if not self.policy.matches(days):
                continue
            if not candidate.recipients:
                logger.info(
                    "No recipients for extinguisher %s; skipping", candidate.extinguisher.id
                )
                continue
            due.append((candidate, days))
        report.assets_qualifying = len(due)

        async with anyio.create_task_group() as task_group:
            for candidate, days in due:
                for recipient in candidate.recipients:
                    if not report.push_skipped:
                        task_group.start_soon(self._push, report, candidate, recipient, days)
                    if not report.email_skipped:
                        task_group.start_soon(self._email, report, candidate, recipient, days)

        logger.info(
            "%s reminders complete: %s assets considered, %s assets due, "
            "%s emails sent (%s failed), %s push sent (%s failed)",
            self.kind.value.capitalize(),
            report.assets_considered,
            report.assets_qualifying,
            report.emails_sent,
            report.emails_failed,
            report.push_sent,
            report.push_failed,
        )
        return report

    async def _push(
        self,
        report: ReminderTickReport,
        candidate: ReminderCandidate,
        recipient: User,
        days: int,
    ) -> None:
        notification = build_push_notification(self.kind, candidate.extinguisher, days)
        try:
            summary = await self._dispatcher.send_to_user(
                recipient.id, notification.to_payload()
            )
        except Exception:
            logger.exception(
                "Push reminder for extinguisher %s to user %s failed",
                candidate.extinguisher.id,
                recipient.id,
            )
            summary = DispatchSummary(failed=1)
        report.push_sent += summary.sent
        report.push_failed += summary.failed

    async def _email(
        self,
        report: ReminderTickReport,
        candidate: ReminderCandidate,
        recipient: User,
        days: int,
    ) -> None:
        subject, html_body = render_reminder_email(
            self.kind,
            candidate.extinguisher,
            days_until_due=days,
            recipient_name=recipient.name or recipient.email,
            company_name=candidate.company_name,
            dashboard_url=self._dashboard_url,
        )
        try:
            sent = await to_thread.run_sync(
                self._email_sender.send,
                recipient.email,
                subject,
                html_body,
                limiter=self._limiter,
            )
        except Exception:
            logger.exception(
                "Email reminder for extinguisher %s to %s failed",
                candidate.extinguisher.id,
                recipient.email,
            )
            sent = False

        if sent:
            report.emails_sent += 1
            logger.info(
                "Sent %s reminder for %s to %s",
                self.kind.value,
                candidate.extinguisher.id,
                recipient.email,
            )
        else:
            report.emails_failed += 1


__all__ = ["CandidateSource", "ReminderCheck"]
