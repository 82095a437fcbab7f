"""Protocol messages, their routing metadata and their wire encoding."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import ClassVar

from google.protobuf import any_pb2
from google.protobuf.message import DecodeError

from threshsig.party_id import PartyID

TYPE_URL_PREFIX = "type.googleapis.com/"

_content_types: dict[str, type[MessageContent]] = {}


class MessageContent(abc.ABC):
    """The payload of a protocol message, identified by a registered type name."""

    TYPE_NAME: ClassVar[str] = ""

    def type_name(self) -> str:
        """The fully qualified name under which this content is encoded."""
        return type(self).TYPE_NAME

    @abc.abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the content."""

    @classmethod
    @abc.abstractmethod
    def from_bytes(cls, data: bytes) -> MessageContent:
        """Rebuild the content from its serialized form."""

    @abc.abstractmethod
    def validate_basic(self) -> bool:
        """True when the content is well formed."""


def register_content(cls: type[MessageContent]) -> type[MessageContent]:
    """Make a content type known to the wire decoder; usable as a decorator."""
    name = getattr(cls, "TYPE_NAME", "")
    if not name:
        raise TypeError(f"{cls.__name__} does not define TYPE_NAME")
    _content_types[name] = cls
    return cls


def _type_name(type_url: str) -> str:
    return type_url.rsplit("/", 1)[-1]


@dataclass
class MessageRouting:
    """How a message is to be delivered; ``to`` of None means every party."""

    from_party: PartyID | None
    to: list[PartyID] | None = None
    is_broadcast: bool = False
    is_to_old_committee: bool = False
    is_to_old_and_new_committees: bool = False


@dataclass
class MessageWrapper:
    """The envelope sent over the wire: routing flags and the packed content."""

    message: any_pb2.Any = field(default_factory=any_pb2.Any)
    from_party: PartyID | None = None
    to: list[PartyID] | None = None
    is_broadcast: bool = False
    is_to_old_committee: bool = False
    is_to_old_and_new_committees: bool = False


def new_message_wrapper(routing: MessageRouting, content: MessageContent) -> MessageWrapper:
    """Build the wire envelope for ``content`` routed as described by ``routing``."""
    packed = any_pb2.Any(
        type_url=TYPE_URL_PREFIX + content.type_name(),
        value=content.to_bytes(),
    )
    return MessageWrapper(
        message=packed,
        from_party=routing.from_party,
        to=list(routing.to) if routing.to is not None else None,
        is_broadcast=routing.is_broadcast,
        is_to_old_committee=routing.is_to_old_committee,
        is_to_old_and_new_committees=routing.is_to_old_and_new_committees,
    )


@dataclass(eq=False)
class Message:
    """A message produced or received by a party, with parsed content."""

    routing: MessageRouting
    content: MessageContent | None
    wire: MessageWrapper

    @property
    def from_party(self) -> PartyID | None:
        return self.routing.from_party

    @property
    def to(self) -> list[PartyID] | None:
        return self.routing.to

    @property
    def is_broadcast(self) -> bool:
        return self.wire.is_broadcast

    @property
    def is_to_old_committee(self) -> bool:
        return self.wire.is_to_old_committee

    @property
    def is_to_old_and_new_committees(self) -> bool:
        return self.wire.is_to_old_and_new_committees

    def type(self) -> str:
        """The type name of the content."""
        return self.content.type_name()

    def wire_bytes(self) -> tuple[bytes, MessageRouting]:
        """The encoded envelope content together with its routing."""
        return self.wire.message.SerializeToString(), self.routing

    def validate_basic(self) -> bool:
        """True when the content is well formed."""
        return self.content.validate_basic()

    def __str__(self) -> str:
        to_str = "all"
        if self.to is not None:
            to_str = "[" + " ".join(str(pid) for pid in self.to) + "]"
        extra = " (To Old Committee)" if self.is_to_old_committee else ""
        return f"Type: {self.type()}, From: {self.from_party}, To: {to_str}{extra}"


def parse_wire_message(
    wire_bytes: bytes, from_party: PartyID, is_broadcast: bool
) -> Message:
    """Decode bytes received from ``from_party`` into a message."""
    envelope = any_pb2.Any()
    try:
        envelope.ParseFromString(bytes(wire_bytes))
    except DecodeError as exc:
        raise ValueError(f"could not decode wire message: {exc}") from exc
    wire = MessageWrapper(
        message=envelope, from_party=from_party, is_broadcast=is_broadcast
    )
    content_type = _content_types.get(_type_name(envelope.type_url))
    if content_type is None:
        raise ValueError("ParseWireMessage: the message contained unknown content")
    content = content_type.from_bytes(envelope.value)
    routing = MessageRouting(from_party=from_party, is_broadcast=is_broadcast)
    return Message(routing, content, wire)