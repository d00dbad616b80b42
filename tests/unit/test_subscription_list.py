"""Unit tests for the SubscriptionList message."""

from __future__ import annotations

import gzip

import pytest
from pydantic import ValidationError

from discoproto import (
    SUBSCRIPTION_LIST_PROTO,
    EncodeError,
    SchemaRegistry,
    Subscription,
    SubscriptionList,
    decode,
    encode,
)
from discoproto.codec import to_text

FULL_NAME = "wso2.discovery.subscription.SubscriptionList"


class TestSubscriptionList:
    """Test the SubscriptionList data model."""

    def test_full_name(self) -> None:
        """Test the namespace-qualified type names."""
        assert SubscriptionList.full_name() == FULL_NAME
        assert Subscription.full_name() == "wso2.discovery.subscription.Subscription"

    def test_get_list_empty(self) -> None:
        """Test an uninitialized list is empty, not None."""
        msg = SubscriptionList()
        assert msg.get_list() == []

    def test_empty_round_trip(self) -> None:
        """Test an empty list encodes to no field entries and decodes back empty."""
        data = encode(SubscriptionList())
        assert data == b""

        decoded = decode(SubscriptionList, data)
        assert decoded.get_list() == []
        assert decoded == SubscriptionList()

    def test_field_tag_stability(self) -> None:
        """Test a one-element list is written under field number 2."""
        data = encode(SubscriptionList(list=[Subscription(subscription_id="a")]))

        assert data == b"\x12\x03\x0a\x01a"
        assert data[0] >> 3 == 2
        assert data[0] & 0x07 == 2

    def test_insertion_order_preserved(
        self, first_subscription: Subscription, second_subscription: Subscription
    ) -> None:
        """Test two elements decode in their original order."""
        msg = SubscriptionList(list=[first_subscription, second_subscription])

        decoded = decode(SubscriptionList, encode(msg))

        assert len(decoded.get_list()) == 2
        assert [s.subscription_id for s in decoded.get_list()] == ["sub-1", "sub-2"]
        assert decoded.get_list() == [first_subscription, second_subscription]

    def test_equality_ignores_order(
        self, first_subscription: Subscription, second_subscription: Subscription
    ) -> None:
        """Test equality is order-insensitive while the wire keeps the order."""
        forward = SubscriptionList(list=[first_subscription, second_subscription])
        backward = SubscriptionList(list=[second_subscription, first_subscription])

        assert forward == backward
        assert encode(forward) != encode(backward)

    def test_equality_counts_duplicates(self, first_subscription: Subscription) -> None:
        """Test a repeated element is not equal to a single one."""
        once = SubscriptionList(list=[first_subscription])
        twice = SubscriptionList(list=[first_subscription, first_subscription])
        assert once != twice

    def test_equality_includes_unknown_fields(self) -> None:
        """Test unknown fields take part in equality."""
        plain = decode(SubscriptionList, b"")
        with_unknown = decode(SubscriptionList, b"\x08\x01")
        assert plain != with_unknown

    def test_equality_with_unvalidated_element(self) -> None:
        """Test a None appended past validation does not break comparison."""
        msg = SubscriptionList()
        msg.list.append(None)  # type: ignore[arg-type]

        with pytest.raises(EncodeError, match="element 0 is None"):
            encode(msg)
        assert msg != SubscriptionList()

        other = SubscriptionList()
        other.list.append(None)  # type: ignore[arg-type]
        assert msg == other

    def test_none_element_rejected(self) -> None:
        """Test None elements are rejected at construction and assignment."""
        with pytest.raises(ValidationError):
            SubscriptionList(list=[None])  # type: ignore[list-item]

        msg = SubscriptionList()
        with pytest.raises(ValidationError):
            msg.list = [None]  # type: ignore[list-item]

    def test_append_and_replace(
        self, first_subscription: Subscription, second_subscription: Subscription
    ) -> None:
        """Test mutation by appending and replacing elements."""
        msg = SubscriptionList()
        msg.list.append(first_subscription)
        msg.list[0] = second_subscription

        assert decode(SubscriptionList, encode(msg)).get_list() == [second_subscription]

    def test_reset(self, first_subscription: Subscription) -> None:
        """Test reset() restores the empty value and drops unknown fields."""
        msg = decode(SubscriptionList, encode(SubscriptionList(list=[first_subscription])) + b"\x08\x01")
        assert msg.unknown_fields == b"\x08\x01"

        msg.reset()

        assert msg.get_list() == []
        assert msg.unknown_fields == b""
        assert encode(msg) == b""

    def test_serialize_helpers(self, first_subscription: Subscription) -> None:
        """Test serialize()/deserialize()/byte_size() wrappers."""
        msg = SubscriptionList(list=[first_subscription])
        data = msg.serialize()

        assert data == encode(msg)
        assert SubscriptionList.deserialize(data) == msg
        assert msg.byte_size() == len(data)


class TestStringRepresentation:
    """Test text-format rendering."""

    def test_str(self) -> None:
        """Test multi-line text format."""
        msg = SubscriptionList(list=[Subscription(subscription_id="s1", api_id=7)])
        assert str(msg) == 'list {\n  subscriptionId: "s1"\n  apiId: 7\n}\n'

    def test_one_line(self) -> None:
        """Test single-line text format."""
        msg = SubscriptionList(list=[Subscription(subscription_id="s1", api_id=7)])
        assert to_text(msg, as_one_line=True) == 'list { subscriptionId: "s1" apiId: 7 }'

    def test_empty(self) -> None:
        """Test an empty message renders as an empty string."""
        assert SubscriptionList().string_representation() == ""

    def test_escaping(self) -> None:
        """Test quotes and non-ASCII characters are escaped."""
        text = str(Subscription(tenant_domain='a"b\né'))
        assert text == 'tenantDomain: "a\\"b\\n\\303\\251"\n'

    def test_deterministic(
        self, first_subscription: Subscription, second_subscription: Subscription
    ) -> None:
        """Test equal messages render identically."""
        a = SubscriptionList(list=[first_subscription, second_subscription])
        b = decode(SubscriptionList, encode(a))
        assert str(a) == str(b)


class TestDescriptorAccess:
    """Test descriptor accessors."""

    def test_descriptor_deprecated(self) -> None:
        """Test the legacy accessor warns and returns the compressed file descriptor."""
        with pytest.warns(DeprecationWarning, match="proto_reflect"):
            ref = SubscriptionList.descriptor()

        assert ref.full_name == FULL_NAME
        assert ref.path == (0,)
        assert gzip.decompress(ref.file_descriptor) == SUBSCRIPTION_LIST_PROTO.raw.serialized

    def test_descriptor_is_stable(self) -> None:
        """Test repeated calls return the same cached bytes."""
        with pytest.warns(DeprecationWarning):
            first = SubscriptionList.descriptor()
        with pytest.warns(DeprecationWarning):
            second = SubscriptionList.descriptor()
        assert first.file_descriptor is second.file_descriptor

    def test_proto_reflect(self, registry: SchemaRegistry) -> None:
        """Test the reflective handle from an explicit registry."""
        descriptor = SubscriptionList.proto_reflect(registry)

        assert descriptor.full_name == FULL_NAME
        field = descriptor.fields_by_number[2]
        assert field.name == "list"
        assert field.message_type.full_name == "wso2.discovery.subscription.Subscription"

    def test_proto_reflect_default_registry(self) -> None:
        """Test the reflective handle from the process-wide registry."""
        assert SubscriptionList.proto_reflect().full_name == FULL_NAME
