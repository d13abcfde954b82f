"""Tests for the push notification fan-out."""

from __future__ import annotations

import pytest
import requests

from fireguard.domain.entities import DispatchSummary, NotificationPayload
from fireguard.infrastructure.notifications import NotificationDispatcher

PAYLOAD = NotificationPayload(title="Hello", body="World")


@pytest.mark.anyio
async def test_user_without_subscriptions_gets_zero_summary(fakes):
    store = fakes.Store()
    push_sender = fakes.PushSender()
    dispatcher = NotificationDispatcher(store, push_sender)

    summary = await dispatcher.send_to_user(42, PAYLOAD)

    assert summary == DispatchSummary(sent=0, failed=0)
    assert push_sender.calls == []


@pytest.mark.anyio
async def test_disabled_push_returns_zero_without_lookup(fakes):
    store = fakes.Store([fakes.subscription("https://push.example/a")])
    dispatcher = NotificationDispatcher(store, fakes.PushSender(configured=False))

    summary = await dispatcher.send_to_user(1, PAYLOAD)

    assert summary == DispatchSummary()
    assert store.list_calls == 0


@pytest.mark.anyio
async def test_gone_endpoint_is_deleted_exactly_once(fakes):
    store = fakes.Store(
        [
            fakes.subscription("https://push.example/ok", subscription_id=1),
            fakes.subscription("https://push.example/gone", subscription_id=2),
        ]
    )
    push_sender = fakes.PushSender(responses={"https://push.example/gone": 410})
    dispatcher = NotificationDispatcher(store, push_sender)

    summary = await dispatcher.send_to_user(1, PAYLOAD)

    assert summary.sent == 1
    assert summary.failed == 1
    assert summary.removed == 1
    assert store.deleted == ["https://push.example/gone"]
    assert store.touched == [1]
    assert "https://push.example/ok" in store.subscriptions


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [503, 404, requests.Timeout("timed out"), RuntimeError("boom")],
)
async def test_transient_failures_keep_the_subscription(fakes, response):
    endpoint = "https://push.example/flaky"
    store = fakes.Store([fakes.subscription(endpoint, subscription_id=7)])
    dispatcher = NotificationDispatcher(store, fakes.PushSender(responses={endpoint: response}))

    summary = await dispatcher.send_to_user(1, PAYLOAD)

    assert summary == DispatchSummary(sent=0, failed=1, removed=0)
    assert store.deleted == []
    assert endpoint in store.subscriptions


@pytest.mark.anyio
async def test_tenant_fan_out_runs_concurrently(fakes):
    subscriptions = [
        fakes.subscription(f"https://push.example/{index}", user_id=index, subscription_id=index)
        for index in range(1, 6)
    ]
    store = fakes.Store(subscriptions)
    push_sender = fakes.PushSender(delay=0.05)
    dispatcher = NotificationDispatcher(store, push_sender, max_concurrency=5)

    summary = await dispatcher.send_to_tenant(1, PAYLOAD)

    assert summary.sent == 5
    assert len(push_sender.calls) == 5
    assert push_sender.max_active > 1


@pytest.mark.anyio
async def test_store_errors_after_delivery_are_contained(fakes, caplog):
    store = fakes.Store([fakes.subscription("https://push.example/a", subscription_id=1)])

    def broken_touch(subscription_id, when=None):
        raise RuntimeError("database locked")

    store.touch = broken_touch
    dispatcher = NotificationDispatcher(store, fakes.PushSender())

    summary = await dispatcher.send_to_user(1, PAYLOAD)

    assert summary.sent == 1
    assert "Could not update push subscription" in caplog.text
