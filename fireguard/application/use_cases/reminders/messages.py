"""Push and email renderings of a deadline reminder."""

from __future__ import annotations

from datetime import date, datetime
from html import escape
from typing import NamedTuple

from fireguard.domain.entities import (
    DeadlineKind,
    Extinguisher,
    InspectionDueNotification,
    MaintenanceDueNotification,
)
from fireguard.utils import local_date, now_in_app_timezone


class Urgency(NamedTuple):
    label: str
    color: str


class _KindStyle(NamedTuple):
    noun: str
    heading: str
    header_gradient: str
    accent: str
    card_background: str
    card_border: str
    label_color: str
    intro: str
    closing: str


_STYLES: dict[DeadlineKind, _KindStyle] = {
    DeadlineKind.INSPECTION: _KindStyle(
        noun="Inspection",
        heading="\U0001f525 Fire Safety Reminder",
        header_gradient="linear-gradient(135deg, #7c3aed 0%, #5b21b6 100%)",
        accent="#7c3aed",
        card_background="#f9fafb",
        card_border="#e5e7eb",
        label_color="#6b7280",
        intro="This is a reminder that a fire extinguisher inspection is due soon:",
        closing=(
            "Please ensure this inspection is completed before the due date to "
            "maintain compliance with fire safety regulations."
        ),
    ),
    DeadlineKind.MAINTENANCE: _KindStyle(
        noun="Maintenance",
        heading="\U0001f527 Maintenance Reminder",
        header_gradient="linear-gradient(135deg, #f59e0b 0%, #d97706 100%)",
        accent="#f59e0b",
        card_background="#fef3c7",
        card_border="#fde68a",
        label_color="#92400e",
        intro=(
            "This is a reminder that scheduled maintenance is due soon for a "
            "fire extinguisher:"
        ),
        closing=(
            "Please schedule maintenance before the due date to ensure continued "
            "compliance and safety."
        ),
    ),
}


def urgency_for(days_until_due: int) -> Urgency:
    if days_until_due <= 7:
        return Urgency("URGENT", "#ef4444")
    if days_until_due <= 14:
        return Urgency("Important", "#f59e0b")
    return Urgency("Upcoming", "#3b82f6")


def format_due_date(value: datetime | date) -> str:
    """Return a long English date such as ``Monday, 19 October 2026``."""

    day = local_date(value)
    return f"{day:%A}, {day.day} {day:%B %Y}"


def build_push_notification(
    kind: DeadlineKind, extinguisher: Extinguisher, days_until_due: int
) -> InspectionDueNotification | MaintenanceDueNotification:
    if kind is DeadlineKind.INSPECTION:
        return InspectionDueNotification(
            extinguisher_id=extinguisher.id,
            building=extinguisher.building,
            location=extinguisher.location,
            days_until_due=days_until_due,
        )
    return MaintenanceDueNotification(
        extinguisher_id=extinguisher.id,
        building=extinguisher.building,
        location=extinguisher.location,
        days_until_due=days_until_due,
    )


def render_reminder_email(
    kind: DeadlineKind,
    extinguisher: Extinguisher,
    *,
    days_until_due: int,
    recipient_name: str,
    company_name: str,
    dashboard_url: str,
) -> tuple[str, str]:
    """Return the ``(subject, html)`` pair for a reminder email."""

    style = _STYLES[kind]
    urgency = urgency_for(days_until_due)
    deadline = extinguisher.deadline_for(kind)
    due_date = format_due_date(deadline) if deadline is not None else "-"
    company = escape(company_name)

    subject = (
        f"{urgency.label}: Fire Extinguisher {style.noun} Due in {days_until_due} Days"
    )

    rows = "".join(
        (
            '<tr>'
            f'<td style="padding: 8px 0; color: {style.label_color}; font-size: 14px;">{label}:</td>'
            f'<td style="padding: 8px 0; font-weight: 600; text-align: right;{extra}">{value}</td>'
            "</tr>"
        )
        for label, value, extra in (
            ("Extinguisher ID", escape(extinguisher.id), ""),
            ("Location", escape(extinguisher.location), ""),
            ("Building", escape(extinguisher.building), ""),
            ("Due Date", escape(due_date), f" color: {urgency.color};"),
        )
    )

    html_content = "".join(
        (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\">",
            f"<title>{style.noun} Reminder</title></head>",
            '<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; '
            'margin: 0; padding: 0; background-color: #f3f4f6;">',
            '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">',
            f'<div style="background: {style.header_gradient}; color: white; padding: 30px; '
            'border-radius: 12px 12px 0 0; text-align: center;">',
            f'<h1 style="margin: 0; font-size: 24px;">{style.heading}</h1>',
            f'<p style="margin: 10px 0 0 0; opacity: 0.9;">{company}</p></div>',
            f'<div style="background: white; padding: 20px; border-left: 4px solid {urgency.color};">',
            f'<div style="display: inline-block; background: {urgency.color}; color: white; '
            'padding: 6px 12px; border-radius: 6px; font-size: 12px; font-weight: bold; '
            f'text-transform: uppercase;">{urgency.label}: {days_until_due} Days Remaining</div></div>',
            '<div style="background: white; padding: 30px;">',
            f"<p>Hi {escape(recipient_name)},</p>",
            f"<p>{style.intro}</p>",
            f'<div style="background: {style.card_background}; border: 1px solid {style.card_border}; '
            'border-radius: 8px; padding: 20px; margin: 20px 0;">',
            f'<table style="width: 100%; border-collapse: collapse;">{rows}</table></div>',
            f"<p>{style.closing}</p>",
            '<div style="text-align: center; margin: 30px 0;">',
            f'<a href="{escape(dashboard_url, quote=True)}" style="display: inline-block; '
            f"background: {style.accent}; color: white; padding: 14px 32px; "
            'text-decoration: none; border-radius: 8px; font-weight: 600;">View Dashboard</a></div></div>',
            '<div style="background: #f9fafb; padding: 20px; border-radius: 0 0 12px 12px; '
            'text-align: center; color: #6b7280; font-size: 14px;">',
            "<p>This is an automated reminder from your Fire Safety Management System.</p>",
            f'<p style="font-size: 12px;">&copy; {now_in_app_timezone().year} {company}. All rights reserved.</p>',
            "</div></div></body></html>",
        )
    )
    return subject, html_content


__all__ = [
    "Urgency",
    "urgency_for",
    "format_due_date",
    "build_push_notification",
    "render_reminder_email",
]
