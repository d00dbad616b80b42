"""Messages of the wso2.discovery.subscription protobuf package."""

from __future__ import annotations

from .subscription import SUBSCRIPTION_PROTO, Subscription
from .subscription_list import SUBSCRIPTION_LIST_PROTO, SubscriptionList

__all__ = [
    "Subscription",
    "SubscriptionList",
    "SUBSCRIPTION_PROTO",
    "SUBSCRIPTION_LIST_PROTO",
]
