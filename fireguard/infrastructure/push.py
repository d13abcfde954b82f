"""Web Push delivery signed with VAPID credentials."""

from __future__ import annotations

import json
import logging
from functools import lru_cache

import requests
from pywebpush import WebPushException, webpush

from fireguard.config import Settings, get_settings
from fireguard.domain.entities import (
    DeliveryChannel,
    DeliveryOutcome,
    NotificationPayload,
    PushSubscription,
)

logger = logging.getLogger(__name__)

HTTP_GONE = 410


class PushSender:
    """Encrypt and submit notifications to push service endpoints."""

    def __init__(
        self,
        *,
        public_key: str | None,
        private_key: str | None,
        subject: str,
        timeout: float = 10.0,
        ttl: int = 86400,
    ) -> None:
        self.public_key = public_key or ""
        self._private_key = private_key or ""
        self.subject = subject
        self.timeout = timeout
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "PushSender":
        sender = cls(
            public_key=settings.vapid_public_key,
            private_key=settings.vapid_private_key,
            subject=settings.vapid_subject,
            timeout=settings.push_timeout_seconds,
            ttl=settings.push_ttl_seconds,
        )
        if sender.is_configured():
            logger.info("Push notifications configured")
        else:
            logger.warning("VAPID keys not configured. Push notifications are disabled.")
        return sender

    def is_configured(self) -> bool:
        return bool(self.public_key and self._private_key)

    def configuration_status(self) -> dict[str, object]:
        if self.is_configured():
            return {"configured": True, "message": "Push service is configured and ready"}
        return {
            "configured": False,
            "message": "Push service not configured. Set VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY.",
        }

    def send(
        self, subscription: PushSubscription, payload: NotificationPayload
    ) -> DeliveryOutcome:
        """Deliver ``payload`` to ``subscription`` and classify the response.

        Any 2xx status is a success, ``410 Gone`` is a permanent failure and every
        other status, timeout or network error is transient. Never raises.
        """

        ref = subscription.endpoint
        if not self.is_configured():
            return DeliveryOutcome.failed(DeliveryChannel.PUSH, ref, "Push channel disabled")

        try:
            response = webpush(
                subscription_info=subscription.subscription_info(),
                data=json.dumps(payload.to_wire()),
                vapid_private_key=self._private_key,
                # pywebpush adds "aud" and "exp" to the claims it receives.
                vapid_claims={"sub": self.subject},
                ttl=self.ttl,
                timeout=self.timeout,
            )
        except WebPushException as exc:
            status_code = getattr(exc.response, "status_code", None)
            if status_code == HTTP_GONE:
                return DeliveryOutcome.failed(
                    DeliveryChannel.PUSH, ref, "Subscription gone (410)", permanent=True
                )
            return DeliveryOutcome.failed(
                DeliveryChannel.PUSH, ref, f"Push service error ({status_code}): {exc.message}"
            )
        except requests.Timeout:
            return DeliveryOutcome.failed(
                DeliveryChannel.PUSH, ref, f"Timed out after {self.timeout}s"
            )
        except requests.RequestException as exc:
            return DeliveryOutcome.failed(DeliveryChannel.PUSH, ref, f"Network error: {exc}")
        except Exception as exc:  # key material and encryption errors
            logger.exception("Unexpected push failure for %s", subscription.short_endpoint())
            return DeliveryOutcome.failed(DeliveryChannel.PUSH, ref, str(exc))

        status_code = getattr(response, "status_code", 201)
        if 200 <= status_code < 300:
            return DeliveryOutcome.delivered(DeliveryChannel.PUSH, ref)
        if status_code == HTTP_GONE:
            return DeliveryOutcome.failed(
                DeliveryChannel.PUSH, ref, "Subscription gone (410)", permanent=True
            )
        return DeliveryOutcome.failed(
            DeliveryChannel.PUSH, ref, f"Unexpected push service status {status_code}"
        )


@lru_cache
def get_push_sender() -> PushSender:
    """Return the process-wide push sender built from settings."""

    return PushSender.from_settings(get_settings())


__all__ = ["PushSender", "get_push_sender", "HTTP_GONE"]
