"""Shared fixtures: an isolated SQLite database and in-memory channel fakes."""

from __future__ import annotations

import os
import sys
import tempfile
import threading
import time
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="fireguard-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["SCHEDULER_ENABLED"] = "false"
for _name in (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_FROM",
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "VAPID_PUBLIC_KEY",
    "VAPID_PRIVATE_KEY",
):
    os.environ.pop(_name, None)

from fireguard.domain.entities import (  # noqa: E402
    DeliveryChannel,
    DeliveryOutcome,
    PushSubscription,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db_session():
    """Yield a session bound to freshly created tables."""

    from fireguard.infrastructure.database import Base, SessionLocal, engine, initialize_database

    Base.metadata.drop_all(bind=engine, checkfirst=True)
    initialize_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory(db_session):
    from fireguard.infrastructure.database import SessionLocal

    return SessionLocal


class FakePushSender:
    """Record sends and answer with a status code chosen per endpoint."""

    def __init__(
        self,
        *,
        configured: bool = True,
        responses: dict[str, int | Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.public_key = "test-public-key" if configured else ""
        self._configured = configured
        self.responses = responses or {}
        self.delay = delay
        self.calls: list[tuple[str, object]] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def is_configured(self) -> bool:
        return self._configured

    def configuration_status(self) -> dict[str, object]:
        return {"configured": self._configured, "message": "fake push"}

    def send(self, subscription: PushSubscription, payload) -> DeliveryOutcome:
        with self._lock:
            self.calls.append((subscription.endpoint, payload))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            result = self.responses.get(subscription.endpoint, 201)
            if isinstance(result, Exception):
                raise result
            if 200 <= result < 300:
                return DeliveryOutcome.delivered(DeliveryChannel.PUSH, subscription.endpoint)
            return DeliveryOutcome.failed(
                DeliveryChannel.PUSH,
                subscription.endpoint,
                f"status {result}",
                permanent=result == 410,
            )
        finally:
            with self._lock:
                self.active -= 1


class FakeSubscriptionStore:
    """In-memory stand-in for :class:`SubscriptionStore`."""

    def __init__(self, subscriptions: Iterable[PushSubscription] = ()) -> None:
        self.subscriptions = {item.endpoint: item for item in subscriptions}
        self.deleted: list[str] = []
        self.touched: list[int] = []
        self.list_calls = 0
        self._lock = threading.Lock()

    def list_by_user(self, user_id: int) -> list[PushSubscription]:
        self.list_calls += 1
        return [item for item in self.subscriptions.values() if item.user_id == user_id]

    def list_by_tenant(self, tenant_id: int) -> list[PushSubscription]:
        self.list_calls += 1
        return [item for item in self.subscriptions.values() if item.tenant_id == tenant_id]

    def touch(self, subscription_id: int, when: datetime | None = None) -> bool:
        with self._lock:
            self.touched.append(subscription_id)
        return True

    def delete_by_endpoint(self, endpoint: str) -> bool:
        with self._lock:
            self.deleted.append(endpoint)
            return self.subscriptions.pop(endpoint, None) is not None


class FakeEmailSender:
    """Collect outgoing emails instead of talking to SMTP."""

    def __init__(self, *, configured: bool = True, failing: Iterable[str] = ()) -> None:
        self._configured = configured
        self.failing = set(failing)
        self.sent: list[tuple[str, str, str]] = []
        self.attempts = 0
        self._lock = threading.Lock()

    def is_configured(self) -> bool:
        return self._configured

    def configuration_status(self) -> dict[str, object]:
        return {"configured": self._configured, "message": "fake email"}

    def send(self, recipient_email: str, subject: str, html_body: str) -> bool:
        with self._lock:
            self.attempts += 1
            if not self._configured or recipient_email in self.failing:
                return False
            self.sent.append((recipient_email, subject, html_body))
            return True


def make_subscription(
    endpoint: str, *, user_id: int = 1, tenant_id: int = 1, subscription_id: int | None = None
) -> PushSubscription:
    return PushSubscription(
        id=subscription_id,
        user_id=user_id,
        tenant_id=tenant_id,
        endpoint=endpoint,
        p256dh="p256dh-key",
        auth="auth-secret",
    )


@pytest.fixture
def fakes():
    """Expose the fake collaborators to test modules."""

    return SimpleNamespace(
        PushSender=FakePushSender,
        Store=FakeSubscriptionStore,
        EmailSender=FakeEmailSender,
        subscription=make_subscription,
    )
