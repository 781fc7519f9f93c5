"""
Tests for result envelopes (models/envelope.py) and HandlerResponse.
"""

import pytest

from generic_handlers import (
    HandlerResponse,
    InsertEnvelope,
    ListEnvelope,
    ResultEnvelope,
)

from helpers import Customer


class TestWireFormat:
    """Wire keys and omission rules."""

    def test_success_fetch_envelope(self):
        """Test a successful fetch envelope carries only IsSuccessful."""
        assert ResultEnvelope(is_successful=True).to_wire() == {"IsSuccessful": True}

    def test_failure_envelope(self):
        """Test failure envelopes carry message and calling method."""
        envelope = InsertEnvelope.failure("boom", "InsertHandler")

        assert envelope.to_wire() == {
            "IsSuccessful": False,
            "ErrorMessage": "boom",
            "CallingMethod": "InsertHandler",
        }

    def test_insert_payload_uses_wire_names(self):
        """Test Value is serialized by alias, without null fields."""
        envelope = InsertEnvelope(is_successful=True, value=Customer(id=42, name="Alice"))

        assert envelope.to_wire() == {"IsSuccessful": True, "Value": {"Id": 42, "Name": "Alice"}}

    def test_list_payload(self):
        """Test List keeps order."""
        envelope = ListEnvelope(
            is_successful=True,
            items=[Customer(id=2, name="Bob"), Customer(id=1, name="Alice")]
        )

        assert envelope.to_wire()["List"] == [{"Id": 2, "Name": "Bob"}, {"Id": 1, "Name": "Alice"}]

    def test_payload_property(self):
        """Test the variant payload accessor."""
        record = Customer(id=1, name="Alice")

        assert ResultEnvelope(is_successful=True).payload is None
        assert InsertEnvelope(value=record).payload is record
        assert ListEnvelope(items=[record]).payload == [record]


class TestRoundTrip:
    """Encoding then decoding reproduces the wire keys exactly."""

    @pytest.mark.parametrize("envelope", [
        ResultEnvelope(is_successful=True),
        ResultEnvelope.failure("Traceback ...", "FetchHandler"),
        InsertEnvelope(is_successful=True, value=Customer(id=42, name="Alice", email="a@example.com")),
        InsertEnvelope.failure("duplicate", "InsertHandler"),
        ListEnvelope(is_successful=True, items=[Customer(id=1, name="Alice")]),
        ListEnvelope(is_successful=True, items=[]),
        ListEnvelope.failure("timeout", "ListHandler"),
    ])
    def test_round_trip(self, envelope):
        """Test from_wire(to_wire(e)) encodes identically."""
        wire = envelope.to_wire()
        decoded = type(envelope).from_wire(wire)

        assert decoded.is_successful == envelope.is_successful
        assert decoded.error_message == envelope.error_message
        assert decoded.calling_method == envelope.calling_method
        assert decoded.to_wire() == wire


class TestHandlerResponse:
    """Transport response defaults."""

    def test_defaults(self):
        """Test status 200 and JSON content type."""
        response = HandlerResponse(body=b'{"IsSuccessful":true}')

        assert response.status_code == 200
        assert response.content_type == "application/json"
        assert response.text == '{"IsSuccessful":true}'
        assert response.is_cacheable is True
