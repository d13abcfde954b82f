"""Endpoints for Web Push subscriptions and on-demand notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from fireguard.application.use_cases.notifications import (
    list_user_subscriptions,
    send_custom_notification,
    send_test_notification,
    subscribe_user,
    unsubscribe_endpoint,
)
from fireguard.domain.entities import NotificationPayload, PushSubscription, User
from fireguard.infrastructure.notifications import (
    NotificationDispatcher,
    SubscriptionStore,
    get_notification_dispatcher,
    get_subscription_store,
)
from fireguard.infrastructure.push import PushSender, get_push_sender
from fireguard.interfaces.api.dependencies import get_current_active_user, require_privileged
from fireguard.interfaces.api.schemas import (
    DispatchSummaryRead,
    NotificationSendRequest,
    PublicKeyRead,
    PushSubscriptionRead,
    SubscribeRequest,
    UnsubscribeRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _subscription_to_schema(subscription: PushSubscription) -> PushSubscriptionRead:
    return PushSubscriptionRead(
        id=subscription.id or 0,
        endpoint=subscription.endpoint,
        device_name=subscription.device_name,
        created_at=subscription.created_at,
        last_used=subscription.last_used,
    )


@router.get("/public-key", response_model=PublicKeyRead)
def get_public_key(push_sender: PushSender = Depends(get_push_sender)) -> PublicKeyRead:
    """Return the VAPID public key browsers need to subscribe."""

    return PublicKeyRead(
        public_key=push_sender.public_key,
        enabled=push_sender.is_configured(),
    )


@router.post(
    "/subscribe",
    response_model=PushSubscriptionRead,
    status_code=status.HTTP_201_CREATED,
)
def subscribe(
    payload: SubscribeRequest,
    store: SubscriptionStore = Depends(get_subscription_store),
    current_user: User = Depends(get_current_active_user),
) -> PushSubscriptionRead:
    try:
        subscription = subscribe_user(
            store,
            current_user,
            endpoint=payload.endpoint,
            p256dh=payload.keys.p256dh,
            auth=payload.keys.auth,
            device_name=payload.device_name,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _subscription_to_schema(subscription)


@router.delete(
    "/subscribe",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def unsubscribe(
    payload: UnsubscribeRequest,
    store: SubscriptionStore = Depends(get_subscription_store),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Remove a subscription; unknown endpoints succeed as well."""

    unsubscribe_endpoint(store, payload.endpoint)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/subscriptions", response_model=list[PushSubscriptionRead])
def list_subscriptions(
    store: SubscriptionStore = Depends(get_subscription_store),
    current_user: User = Depends(get_current_active_user),
) -> list[PushSubscriptionRead]:
    subscriptions = list_user_subscriptions(store, current_user)
    return [_subscription_to_schema(subscription) for subscription in subscriptions]


@router.post("/test", response_model=DispatchSummaryRead)
async def send_test(
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> DispatchSummaryRead:
    """Send a test notification to every device of the caller."""

    summary = await send_test_notification(dispatcher, current_user.id)
    return DispatchSummaryRead(sent=summary.sent, failed=summary.failed)


@router.post("/send", response_model=DispatchSummaryRead)
async def send_notification(
    payload: NotificationSendRequest,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_privileged),
) -> DispatchSummaryRead:
    notification = NotificationPayload(
        title=payload.title,
        body=payload.body,
        icon=payload.icon,
        badge=payload.badge,
        tag=payload.tag,
        data=payload.data,
        require_interaction=payload.require_interaction,
    )
    summary = await send_custom_notification(dispatcher, current_user.id, notification)
    return DispatchSummaryRead(sent=summary.sent, failed=summary.failed)
