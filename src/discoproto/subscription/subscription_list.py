"""SubscriptionList message (wso2/discovery/subscription/subscription_list.proto)."""

from __future__ import annotations

from collections import Counter
from typing import ClassVar, List

from ..descriptor.file import ProtoFile
from ..descriptor.raw import RawDescriptor
from ..models import BaseMessage, RepeatedField
from .subscription import PACKAGE, SUBSCRIPTION_PROTO, Subscription

# FileDescriptorProto as emitted by protoc 3.14 for subscription_list.proto
_RAW_DESCRIPTOR = (
    b"\x0a\x33wso2/discovery/subscription/subscription_list.proto"
    b"\x12\x1bwso2.discovery.subscription"
    b"\x1a\x2ewso2/discovery/subscription/subscription.proto"
    b"\x22\x51"
    b"\x0a\x10SubscriptionList"
    b"\x12\x3d"
    b"\x0a\x04list"
    b"\x18\x02"
    b"\x20\x03"
    b"\x28\x0b"
    b"\x32\x29.wso2.discovery.subscription.Subscription"
    b"\x52\x04list"
    b"\x42\x9a\x01"
    b"\x0a\x2eorg.wso2.choreo.connect.discovery.subscription"
    b"\x42\x15SubscriptionListProto"
    b"\x50\x01"
    b"\x5a\x4fgithub.com/envoyproxy/go-control-plane/wso2/discovery/subscription;subscription"
    b"\x62\x06proto3"
)


class SubscriptionList(BaseMessage):
    """SubscriptionList data model.

    Wraps an ordered list of Subscription records exchanged as one unit. The
    list is written under field number 2; that number is part of the wire
    contract and must not change.

    Two lists compare equal when they hold the same subscriptions, in any
    order, and the same unknown fields. The order is still kept by
    get_list() and on the wire.
    """

    list: List[Subscription] = RepeatedField(2)

    proto_package: ClassVar[str] = PACKAGE

    def get_list(self) -> List[Subscription]:
        """Return the subscriptions in insertion order (never None)."""
        return self.list

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubscriptionList):
            return NotImplemented
        if self.unknown_fields != other.unknown_fields:
            return False
        return Counter(map(_element_key, self.list)) == Counter(map(_element_key, other.list))


def _element_key(item: object) -> object:
    # Elements appended without validation are compared by repr
    if isinstance(item, Subscription):
        return item.serialize()
    return repr(item)


SUBSCRIPTION_LIST_PROTO = ProtoFile(
    name="wso2/discovery/subscription/subscription_list.proto",
    package=PACKAGE,
    raw=RawDescriptor(_RAW_DESCRIPTOR),
    messages=[SubscriptionList],
    dependencies=[SUBSCRIPTION_PROTO],
)
