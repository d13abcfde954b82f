"""Transactional email delivery over SMTP or the SendGrid REST API."""

from __future__ import annotations

import json
import logging
import re
import smtplib
from email.message import EmailMessage
from functools import lru_cache
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from fireguard.config import Settings, get_settings

logger = logging.getLogger(__name__)

_PLACEHOLDER_HOST_MARKERS = ("*", "placeholder", "example")
_TAG_PATTERN = re.compile(r"<[^>]*>")
_STYLE_BLOCK_PATTERN = re.compile(r"<(style|head)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_PATTERN = re.compile(r"\s+")


class EmailTransport(Protocol):
    def deliver(self, recipient: str, subject: str, html_body: str) -> bool: ...


def html_to_text(html_body: str) -> str:
    """Return a plain text rendering of ``html_body`` for multipart messages."""

    without_styles = _STYLE_BLOCK_PATTERN.sub(" ", html_body)
    return _WHITESPACE_PATTERN.sub(" ", _TAG_PATTERN.sub(" ", without_styles)).strip()


class SmtpTransport:
    """Deliver messages through an SMTP relay with a bounded socket timeout."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str,
        password: str,
        sender: str,
        use_tls: bool = True,
        timeout: float = 15.0,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def deliver(self, recipient: str, subject: str, html_body: str) -> bool:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(html_to_text(html_body))
        message.add_alternative(html_body, subtype="html")

        try:
            if self.port == 465:
                client: smtplib.SMTP = smtplib.SMTP_SSL(
                    self.host, self.port, timeout=self.timeout
                )
            else:
                client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with client as smtp_client:
                if self.port != 465 and self.use_tls:
                    smtp_client.starttls()
                smtp_client.login(self.user, self.password)
                smtp_client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery to %s failed: %s", recipient, exc)
            return False
        return True


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


class SendGridTransport:
    """Deliver messages through the SendGrid v3 mail API."""

    def __init__(self, *, api_key: str, sender: str, timeout: float = 15.0) -> None:
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    def deliver(self, recipient: str, subject: str, html_body: str) -> bool:
        message = Mail(
            from_email=self.sender,
            to_emails=recipient,
            subject=subject,
            html_content=html_body,
        )

        try:
            client = SendGridAPIClient(self.api_key)
            # python_http_client defaults to no timeout at all.
            client.client.timeout = self.timeout
            response = client.send(message)
        except Exception as exc:  # sendgrid raises python_http_client errors and socket errors
            self._log_exception(exc)
            return False

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            if details:
                logger.error("SendGrid API responded with status %s: %s", status_code, details)
            else:
                logger.error("SendGrid API responded with status %s", status_code)
            return False
        return True

    @staticmethod
    def _log_exception(exc: Exception) -> None:
        status_code = getattr(exc, "status_code", None)
        details = _extract_sendgrid_error_details(getattr(exc, "body", None))

        if status_code and details:
            logger.error("SendGrid API request failed with status %s: %s", status_code, details)
        elif status_code:
            logger.error("SendGrid API request failed with status %s", status_code)
        elif details:
            logger.error("SendGrid API request failed: %s", details)
        else:
            logger.error("Error sending email via SendGrid: %s", exc)


class EmailSender:
    """Send transactional emails, permanently disabled when unconfigured.

    The configuration is inspected once, at construction time. A sender built
    without a usable transport never opens a connection and every call to
    :meth:`send` returns ``False``.
    """

    def __init__(self, transport: EmailTransport | None, *, reason: str | None = None) -> None:
        self._transport = transport
        self._reason = reason

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSender":
        if settings.sendgrid_api_key and settings.sendgrid_sender:
            logger.info("Email channel configured with SendGrid")
            return cls(
                SendGridTransport(
                    api_key=settings.sendgrid_api_key,
                    sender=settings.sendgrid_sender,
                    timeout=settings.sendgrid_timeout_seconds,
                )
            )

        required = {
            "SMTP_HOST": settings.smtp_host,
            "SMTP_PORT": settings.smtp_port,
            "SMTP_USER": settings.smtp_user,
            "SMTP_PASS": settings.smtp_pass,
            "SMTP_FROM": settings.smtp_from,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            reason = (
                "Email service not configured. Missing environment variables: "
                + ", ".join(missing)
            )
            logger.warning(reason)
            return cls(None, reason=reason)

        host = str(settings.smtp_host).strip()
        if any(marker in host.lower() for marker in _PLACEHOLDER_HOST_MARKERS):
            reason = f"Invalid SMTP_HOST: {host}. Email service not configured."
            logger.warning(reason)
            return cls(None, reason=reason)

        logger.info("Email channel configured with SMTP host %s", host)
        return cls(
            SmtpTransport(
                host=host,
                port=int(settings.smtp_port),
                user=str(settings.smtp_user),
                password=str(settings.smtp_pass),
                sender=str(settings.smtp_from),
                use_tls=settings.smtp_use_tls,
                timeout=settings.smtp_timeout_seconds,
            )
        )

    def is_configured(self) -> bool:
        return self._transport is not None

    def configuration_status(self) -> dict[str, object]:
        if self.is_configured():
            return {"configured": True, "message": "Email service is configured and ready"}
        return {"configured": False, "message": self._reason or "Email service not configured"}

    def send(self, recipient_email: str, subject: str, html_body: str) -> bool:
        """Send ``html_body`` to ``recipient_email``; ``True`` on acceptance."""

        if self._transport is None:
            logger.debug("Email to %s not sent: channel disabled", recipient_email)
            return False

        delivered = self._transport.deliver(recipient_email, subject, html_body)
        if delivered:
            logger.info("Email sent to %s: %s", recipient_email, subject)
        return delivered


@lru_cache
def get_email_sender() -> EmailSender:
    """Return the process-wide email sender built from settings."""

    return EmailSender.from_settings(get_settings())


__all__ = [
    "EmailSender",
    "EmailTransport",
    "SendGridTransport",
    "SmtpTransport",
    "get_email_sender",
    "html_to_text",
]
