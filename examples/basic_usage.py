#!/usr/bin/env python3
"""Basic usage example for discoproto.

This example demonstrates:
1. Building a SubscriptionList
2. Encoding to protobuf wire format
3. Decoding back to Pydantic models
4. Looking the type up in a schema registry
5. Printing the .proto schema behind it
"""

from __future__ import annotations

import logging

from discoproto import (
    SUBSCRIPTION_LIST_PROTO,
    Subscription,
    SubscriptionList,
    build_registry,
    decode,
    encode,
    field_sizes,
    to_proto_schema,
)


def main() -> None:
    """Run the basic usage example."""
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("discoproto Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a subscription list...")
    msg = SubscriptionList(
        list=[
            Subscription(
                subscription_id="sub-1",
                policy_id="Unlimited",
                api_id=12,
                app_id=3,
                subscription_state="UNBLOCKED",
                tenant_domain="carbon.super",
            ),
            Subscription(subscription_id="sub-2", api_id=13, subscription_state="BLOCKED"),
        ]
    )
    print(msg)

    print("2. Field sizes of the first subscription...")
    for field_name, size in field_sizes(msg.get_list()[0]).items():
        if size:
            print(f"   {field_name}: {size} bytes")
    print()

    print("3. Encoding to protobuf wire format...")
    data = encode(msg)
    print(f"   {len(data)} bytes: {data.hex()}")
    print()

    print("4. Decoding...")
    decoded = decode(SubscriptionList, data)
    print(f"   ids: {[s.subscription_id for s in decoded.get_list()]}")
    print(f"   round trip ok: {decoded == msg}")
    print()

    print("5. Registering descriptors...")
    registry = build_registry()
    descriptor = SubscriptionList.proto_reflect(registry)
    print(f"   {descriptor.full_name}: fields {[f.name for f in descriptor.fields]}")
    print()

    print("6. Schema source:")
    print(to_proto_schema(SUBSCRIPTION_LIST_PROTO.file_descriptor_proto()))


if __name__ == "__main__":
    main()
