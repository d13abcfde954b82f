"""Reminder scheduling and notification delivery for fire-safety assets."""
