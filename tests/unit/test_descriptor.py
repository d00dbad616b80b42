"""Unit tests for raw descriptors, proto files and descriptor generation."""

from __future__ import annotations

import gzip
import threading
from typing import ClassVar

import pytest

from discoproto import (
    SUBSCRIPTION_LIST_PROTO,
    SUBSCRIPTION_PROTO,
    BaseMessage,
    ProtoField,
    ProtoFile,
    RawDescriptor,
    SchemaError,
    SchemaRegistrationError,
    Subscription,
    SubscriptionList,
    to_file_descriptor,
    to_proto_schema,
)
from discoproto.descriptor.builder import json_name

LIST_OPTIONS = {
    "java_package": "org.wso2.choreo.connect.discovery.subscription",
    "java_outer_classname": "SubscriptionListProto",
    "java_multiple_files": True,
    "go_package": "github.com/envoyproxy/go-control-plane/wso2/discovery/subscription;subscription",
}


class TestRawDescriptor:
    """Test lazy compression and decompression."""

    def test_compressed_round_trip(self) -> None:
        """Test compressing then decompressing returns the original bytes."""
        raw = RawDescriptor(b"descriptor bytes")
        restored = RawDescriptor(raw.compressed, compressed=True)

        assert restored.serialized == b"descriptor bytes"
        assert restored == raw

    def test_compression_is_deterministic(self) -> None:
        """Test two objects with the same bytes compress identically."""
        assert RawDescriptor(b"abc").compressed == RawDescriptor(b"abc").compressed

    def test_corrupt_compressed_bytes(self) -> None:
        """Test corrupt gzip data raises SchemaRegistrationError."""
        raw = RawDescriptor(b"not gzip", compressed=True)

        with pytest.raises(SchemaRegistrationError, match="Corrupt"):
            raw.serialized

    def test_emptied_descriptor(self) -> None:
        """Test a descriptor with neither form left raises instead of returning None."""
        raw = RawDescriptor(b"abc")
        raw._serialized = None

        with pytest.raises(SchemaRegistrationError, match="no bytes"):
            raw.compressed
        with pytest.raises(SchemaRegistrationError, match="no bytes"):
            raw.serialized

    def test_decompress_once_under_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test concurrent first callers trigger a single decompression."""
        calls = []
        real_decompress = gzip.decompress

        def counting_decompress(data: bytes) -> bytes:
            calls.append(data)
            return real_decompress(data)

        monkeypatch.setattr(gzip, "decompress", counting_decompress)

        raw = RawDescriptor(gzip.compress(b"x" * 1000), compressed=True)
        barrier = threading.Barrier(8)
        results = []

        def worker() -> None:
            barrier.wait()
            results.append(raw.serialized)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result == b"x" * 1000 for result in results)


class TestProtoFile:
    """Test ProtoFile behavior."""

    def test_messages_bound(self) -> None:
        """Test declared classes point back at their file."""
        assert SubscriptionList.proto_file is SUBSCRIPTION_LIST_PROTO
        assert Subscription.proto_file is SUBSCRIPTION_PROTO
        assert SUBSCRIPTION_LIST_PROTO.message_index(SubscriptionList) == 0

    def test_message_index_unknown(self) -> None:
        """Test asking for a class the file does not declare."""
        with pytest.raises(SchemaError, match="not declared"):
            SUBSCRIPTION_LIST_PROTO.message_index(Subscription)

    def test_file_descriptor_proto(self) -> None:
        """Test parsing the shipped subscription_list.proto descriptor."""
        file_proto = SUBSCRIPTION_LIST_PROTO.file_descriptor_proto()

        assert file_proto.name == "wso2/discovery/subscription/subscription_list.proto"
        assert file_proto.package == "wso2.discovery.subscription"
        assert list(file_proto.dependency) == ["wso2/discovery/subscription/subscription.proto"]
        assert file_proto.syntax == "proto3"

        message_proto = file_proto.message_type[0]
        assert message_proto.name == "SubscriptionList"
        field = message_proto.field[0]
        assert (field.name, field.number, field.label, field.type) == ("list", 2, 3, 11)
        assert field.type_name == ".wso2.discovery.subscription.Subscription"

    def test_malformed_bytes(self) -> None:
        """Test bytes that are not a FileDescriptorProto."""
        broken = ProtoFile("broken.proto", "", RawDescriptor(b"\xff\xff"), [])
        with pytest.raises(SchemaRegistrationError, match="malformed"):
            broken.file_descriptor_proto()

    def test_name_mismatch(self) -> None:
        """Test a descriptor recorded under another file name."""
        misnamed = ProtoFile("other.proto", SUBSCRIPTION_LIST_PROTO.package, SUBSCRIPTION_LIST_PROTO.raw, [])
        with pytest.raises(SchemaRegistrationError, match="expected 'other.proto'"):
            misnamed.file_descriptor_proto()

    def test_package_mismatch(self) -> None:
        """Test binding a class from another package."""
        with pytest.raises(SchemaError, match="not 'elsewhere'"):
            ProtoFile("x.proto", "elsewhere", RawDescriptor(b""), [Subscription])


class TestFileDescriptorGeneration:
    """Test descriptors generated from models."""

    def test_matches_protoc_output(self) -> None:
        """Test the generated subscription_list.proto descriptor is byte-identical to protoc's."""
        file_proto = to_file_descriptor(
            [SubscriptionList],
            name=SUBSCRIPTION_LIST_PROTO.name,
            package="wso2.discovery.subscription",
            dependencies=[SUBSCRIPTION_PROTO.name],
            options=LIST_OPTIONS,
        )

        assert file_proto == SUBSCRIPTION_LIST_PROTO.file_descriptor_proto()
        assert file_proto.SerializeToString() == SUBSCRIPTION_LIST_PROTO.raw.serialized

    def test_subscription_fields(self) -> None:
        """Test the Subscription descriptor fields."""
        message_proto = SUBSCRIPTION_PROTO.file_descriptor_proto().message_type[0]

        assert message_proto.name == "Subscription"
        assert [f.number for f in message_proto.field] == list(range(1, 12))
        assert message_proto.field[0].name == "subscriptionId"
        assert message_proto.field[0].json_name == "subscriptionId"

    def test_package_mismatch(self) -> None:
        """Test generating a file for a message of another package."""
        with pytest.raises(SchemaError, match="is in package"):
            to_file_descriptor([Subscription], name="x.proto", package="other")

    def test_proto2_leaves_syntax_unset(self) -> None:
        """Test proto2 files omit the syntax field, as protoc does."""

        class Plain(BaseMessage):
            value: str = ProtoField(1, "string")

            proto_package: ClassVar[str] = "test.plain"

        file_proto = to_file_descriptor([Plain], name="plain.proto", package="test.plain", syntax="proto2")
        assert file_proto.syntax == ""

    @pytest.mark.parametrize(
        ("proto_name", "expected"),
        [("list", "list"), ("api_uuid", "apiUuid"), ("apiUUID", "apiUUID"), ("a_b_c", "aBC")],
    )
    def test_json_name(self, proto_name: str, expected: str) -> None:
        """Test protoc's default JSON name rule."""
        assert json_name(proto_name) == expected


class TestProtoSchemaGeneration:
    """Test .proto source rendering."""

    def test_subscription_list_schema(self) -> None:
        """Test rendering the shipped subscription_list.proto descriptor."""
        proto = to_proto_schema(SUBSCRIPTION_LIST_PROTO.file_descriptor_proto())

        assert proto.startswith('syntax = "proto3";\n')
        assert "package wso2.discovery.subscription;" in proto
        assert 'import "wso2/discovery/subscription/subscription.proto";' in proto
        assert 'option java_package = "org.wso2.choreo.connect.discovery.subscription";' in proto
        assert "option java_multiple_files = true;" in proto
        assert "message SubscriptionList {" in proto
        assert "    repeated Subscription list = 2;" in proto

    def test_subscription_schema(self) -> None:
        """Test rendering the generated subscription.proto descriptor."""
        proto = to_proto_schema(SUBSCRIPTION_PROTO.file_descriptor_proto())

        assert "message Subscription {" in proto
        assert "    string subscriptionId = 1;" in proto
        assert "    int32 apiId = 3;" in proto
        assert "    int64 timeStamp = 6;" in proto
        assert "import" not in proto
