"""
Message attribute carrier tests

Injector (SNS) and extractor (SQS) contracts over boto3-shaped attribute dicts.
"""

import pytest

from otel_aws_messaging.adapters.adapter_interface import TextMapReader, TextMapWriter
from otel_aws_messaging.adapters.sns.injector import MessageAttributesInjector
from otel_aws_messaging.adapters.sqs.extractor import MessageAttributesExtractor


class TestInjector:
    """Writer carrier"""

    def test_sets_string_attribute(self):
        attributes = {}
        injector = MessageAttributesInjector(attributes)

        injector.set("traceparent", "00-abc123-def456-01")

        assert attributes["traceparent"] == {
            "DataType": "String",
            "StringValue": "00-abc123-def456-01",
        }

    def test_overwrites_existing_key(self):
        attributes = {}
        injector = MessageAttributesInjector(attributes)

        injector.set("key", "value1")
        injector.set("key", "value2")

        assert len(attributes) == 1
        assert attributes["key"]["StringValue"] == "value2"

    def test_overwrites_non_string_attribute(self):
        attributes = {"key": {"DataType": "Number", "StringValue": "42"}}

        MessageAttributesInjector(attributes).set("key", "text")

        assert attributes == {"key": {"DataType": "String", "StringValue": "text"}}

    def test_keeps_unrelated_attributes(self):
        attributes = {"tenant": {"DataType": "String", "StringValue": "acme"}}

        MessageAttributesInjector(attributes).set("traceparent", "tp")

        assert set(attributes) == {"tenant", "traceparent"}

    def test_does_not_validate_names(self):
        attributes = {}

        MessageAttributesInjector(attributes).set("AWS.reserved", "x" * 1000)

        assert attributes["AWS.reserved"]["StringValue"] == "x" * 1000

    def test_is_a_writer(self):
        assert isinstance(MessageAttributesInjector({}), TextMapWriter)


class TestExtractor:
    """Reader carrier"""

    def test_gets_existing_key(self, string_attribute):
        attributes = {"traceparent": string_attribute("00-abc123-def456-01")}

        extractor = MessageAttributesExtractor(attributes)

        assert extractor.get("traceparent") == "00-abc123-def456-01"

    def test_returns_none_for_missing_key(self):
        extractor = MessageAttributesExtractor({})

        assert extractor.get("nonexistent") is None

    @pytest.mark.parametrize("value", [
        {"DataType": "Number", "StringValue": "42"},
        {"DataType": "Binary", "BinaryValue": b"\x00\x01"},
        {"DataType": "String"},
        {"DataType": "String", "StringValue": 42},
        {"StringValue": "no-type"},
        "not-a-dict",
        None,
    ])
    def test_non_string_values_read_as_absent(self, value):
        extractor = MessageAttributesExtractor({"key": value})

        assert extractor.get("key") is None

    def test_custom_string_type_is_string(self):
        extractor = MessageAttributesExtractor({
            "traceparent": {"DataType": "String.Trace", "StringValue": "tp"},
        })

        assert extractor.get("traceparent") == "tp"

    def test_keys_returns_all_keys(self, string_attribute):
        attributes = {
            "key2": string_attribute("value2"),
            "key1": string_attribute("value1"),
            "binary": {"DataType": "Binary", "BinaryValue": b"x"},
        }

        keys = MessageAttributesExtractor(attributes).keys()

        assert sorted(keys) == ["binary", "key1", "key2"]
        assert len(keys) == len(set(keys))

    def test_keys_empty(self):
        assert MessageAttributesExtractor({}).keys() == []

    def test_does_not_modify_attributes(self, string_attribute):
        attributes = {"key": string_attribute("value")}
        snapshot = dict(attributes)

        extractor = MessageAttributesExtractor(attributes)
        extractor.get("key")
        extractor.get("missing")
        extractor.keys()

        assert attributes == snapshot

    def test_is_a_reader(self):
        assert isinstance(MessageAttributesExtractor({}), TextMapReader)


class TestRoundTrip:
    """Injector then extractor over the same attribute dict"""

    @pytest.mark.parametrize("name,value", [
        ("traceparent", "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"),
        ("tracestate", "congo=t61rcWkgMzE"),
        ("baggage", "userId=alice,serverNode=DF%2028"),
        ("empty", ""),
    ])
    def test_round_trip(self, name, value):
        attributes = {}

        MessageAttributesInjector(attributes).set(name, value)

        assert MessageAttributesExtractor(attributes).get(name) == value

    def test_overwrite_then_read(self):
        attributes = {}
        injector = MessageAttributesInjector(attributes)

        injector.set("k", "v1")
        injector.set("k", "v2")
        extractor = MessageAttributesExtractor(attributes)

        assert extractor.get("k") == "v2"
        assert extractor.keys() == ["k"]
