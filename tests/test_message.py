from dataclasses import dataclass

import pytest

from threshsig.message import (
    Message,
    MessageContent,
    MessageRouting,
    new_message_wrapper,
    parse_wire_message,
    register_content,
)
from threshsig.party_id import new_party_id, sort_party_ids


@register_content
@dataclass
class Ping(MessageContent):
    TYPE_NAME = "test.Ping"

    payload: bytes

    def to_bytes(self):
        return self.payload

    @classmethod
    def from_bytes(cls, data):
        return cls(bytes(data))

    def validate_basic(self):
        return bool(self.payload)


@pytest.fixture
def parties():
    return sort_party_ids(
        [new_party_id("alice", "alice", 1), new_party_id("bob", "bob", 2)]
    )


def _message(routing, content):
    return Message(routing, content, new_message_wrapper(routing, content))


def test_wire_bytes_are_packed_any(parties):
    routing = MessageRouting(from_party=parties[0], is_broadcast=True)
    msg = _message(routing, Ping(b"hi"))
    data, returned_routing = msg.wire_bytes()
    assert data == b"\x0a\x1dtype.googleapis.com/test.Ping\x12\x02hi"
    assert returned_routing is routing


def test_round_trip(parties):
    alice, bob = parties
    msg = _message(MessageRouting(from_party=bob, is_broadcast=True), Ping(b"data"))
    data, _ = msg.wire_bytes()
    parsed = parse_wire_message(data, bob, True)
    assert parsed.content == Ping(b"data")
    assert parsed.from_party is bob
    assert parsed.is_broadcast is True
    assert parsed.to is None
    assert parsed.type() == "test.Ping"


def test_wrapper_copies_routing(parties):
    alice, bob = parties
    routing = MessageRouting(
        from_party=alice,
        to=[bob],
        is_to_old_committee=True,
        is_to_old_and_new_committees=True,
    )
    wrapper = new_message_wrapper(routing, Ping(b"x"))
    assert wrapper.from_party is alice
    assert wrapper.to == [bob]
    assert wrapper.to is not routing.to
    assert wrapper.is_broadcast is False
    assert wrapper.is_to_old_committee is True
    assert wrapper.is_to_old_and_new_committees is True
    assert wrapper.message.type_url.endswith("/test.Ping")


def test_str_broadcast(parties):
    alice, bob = parties
    msg = _message(MessageRouting(from_party=bob, is_broadcast=True), Ping(b"x"))
    assert str(msg) == "Type: test.Ping, From: {1,bob}, To: all"


def test_str_directed_to_old_committee(parties):
    alice, bob = parties
    msg = _message(
        MessageRouting(from_party=alice, to=[bob], is_to_old_committee=True), Ping(b"x")
    )
    assert str(msg) == "Type: test.Ping, From: {0,alice}, To: [{1,bob}] (To Old Committee)"


def test_validate_basic_delegates(parties):
    routing = MessageRouting(from_party=parties[0])
    assert _message(routing, Ping(b"x")).validate_basic() is True
    assert _message(routing, Ping(b"")).validate_basic() is False


def test_unknown_content_rejected(parties):
    data = new_message_wrapper(
        MessageRouting(from_party=parties[0]), Ping(b"x")
    ).message
    data.type_url = "type.googleapis.com/nobody.Knows"
    with pytest.raises(ValueError, match="unknown content"):
        parse_wire_message(data.SerializeToString(), parties[0], False)


def test_malformed_bytes_rejected(parties):
    with pytest.raises(ValueError):
        parse_wire_message(b"\x0a\x05ab", parties[0], False)


def test_register_requires_type_name():
    class Nameless(Ping):
        TYPE_NAME = ""

    with pytest.raises(TypeError):
        register_content(Nameless)