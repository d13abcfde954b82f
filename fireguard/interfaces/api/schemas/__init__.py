from .notification import (
    DispatchSummaryRead,
    NotificationSendRequest,
    PublicKeyRead,
    PushSubscriptionRead,
    SubscribeRequest,
    SubscriptionKeys,
    UnsubscribeRequest,
)
from .reminder import (
    ChannelStatusRead,
    ReminderScheduleRead,
    ReminderStatusRead,
    ReminderTickReportRead,
)

__all__ = [
    "DispatchSummaryRead",
    "NotificationSendRequest",
    "PublicKeyRead",
    "PushSubscriptionRead",
    "SubscribeRequest",
    "SubscriptionKeys",
    "UnsubscribeRequest",
    "ChannelStatusRead",
    "ReminderScheduleRead",
    "ReminderStatusRead",
    "ReminderTickReportRead",
]
