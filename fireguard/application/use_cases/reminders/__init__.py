"""Deadline reminder use cases."""

from .check_reminders import CandidateSource, ReminderCheck
from .messages import (
    build_push_notification,
    format_due_date,
    render_reminder_email,
    urgency_for,
)
from .policy import days_until_due, policies_from_settings

__all__ = [
    "CandidateSource",
    "ReminderCheck",
    "build_push_notification",
    "format_due_date",
    "render_reminder_email",
    "urgency_for",
    "days_until_due",
    "policies_from_settings",
]
