"""Subscription message (wso2/discovery/subscription/subscription.proto)."""

from __future__ import annotations

from typing import ClassVar

from ..descriptor.builder import to_file_descriptor
from ..descriptor.file import ProtoFile
from ..descriptor.raw import RawDescriptor
from ..models import BaseMessage, ProtoField

PACKAGE = "wso2.discovery.subscription"


class Subscription(BaseMessage):
    """A subscription of an application to an API."""

    subscription_id: str = ProtoField(1, "string", alias="subscriptionId")
    policy_id: str = ProtoField(2, "string", alias="policyId")
    api_id: int = ProtoField(3, "int32", alias="apiId")
    app_id: int = ProtoField(4, "int32", alias="appId")
    subscription_state: str = ProtoField(5, "string", alias="subscriptionState")
    time_stamp: int = ProtoField(6, "int64", alias="timeStamp")
    tenant_id: int = ProtoField(7, "int32", alias="tenantId")
    tenant_domain: str = ProtoField(8, "string", alias="tenantDomain")
    subscription_uuid: str = ProtoField(9, "string", alias="subscriptionUUID")
    app_uuid: str = ProtoField(10, "string", alias="appUUID")
    api_uuid: str = ProtoField(11, "string", alias="apiUUID")

    proto_package: ClassVar[str] = PACKAGE


SUBSCRIPTION_PROTO = ProtoFile(
    name="wso2/discovery/subscription/subscription.proto",
    package=PACKAGE,
    raw=RawDescriptor(
        to_file_descriptor(
            [Subscription],
            name="wso2/discovery/subscription/subscription.proto",
            package=PACKAGE,
            options={
                "java_package": "org.wso2.choreo.connect.discovery.subscription",
                "java_outer_classname": "SubscriptionProto",
                "java_multiple_files": True,
                "go_package": (
                    "github.com/envoyproxy/go-control-plane/wso2/discovery/subscription;subscription"
                ),
            },
        ).SerializeToString()
    ),
    messages=[Subscription],
)
