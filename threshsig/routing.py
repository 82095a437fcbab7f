"""Classification of wire messages by protocol round and delivery mode."""

from __future__ import annotations

from google.protobuf import any_pb2
from google.protobuf.message import DecodeError

_PREFIX = "type.googleapis.com/binance.tsslib."

_ECDSA_ROUNDS: dict[str, int] = {
    _PREFIX + "ecdsa.keygen.KGRound1Message": 1,
    _PREFIX + "ecdsa.keygen.KGRound2Message1": 2,
    _PREFIX + "ecdsa.keygen.KGRound2Message2": 3,
    _PREFIX + "ecdsa.keygen.KGRound3Message": 4,
    _PREFIX + "ecdsa.signing.SignRound1Message1": 5,
    _PREFIX + "ecdsa.signing.SignRound1Message2": 6,
    _PREFIX + "ecdsa.signing.SignRound2Message": 7,
    _PREFIX + "ecdsa.signing.SignRound3Message": 8,
    _PREFIX + "ecdsa.signing.SignRound4Message": 9,
    _PREFIX + "ecdsa.signing.SignRound5Message": 10,
    _PREFIX + "ecdsa.signing.SignRound6Message": 11,
    _PREFIX + "ecdsa.signing.SignRound7Message": 12,
    _PREFIX + "ecdsa.signing.SignRound8Message": 13,
    _PREFIX + "ecdsa.signing.SignRound9Message": 14,
    _PREFIX + "ecdsa.resharing.DGRound1Message": 15,
    _PREFIX + "ecdsa.resharing.DGRound2Message1": 16,
    _PREFIX + "ecdsa.resharing.DGRound2Message2": 17,
    _PREFIX + "ecdsa.resharing.DGRound3Message1": 18,
    _PREFIX + "ecdsa.resharing.DGRound3Message2": 19,
    _PREFIX + "ecdsa.resharing.DGRound4Message1": 20,
    _PREFIX + "ecdsa.resharing.DGRound4Message2": 21,
}

_ECDSA_BROADCASTS: frozenset[str] = frozenset(
    _PREFIX + name
    for name in (
        "ecdsa.keygen.KGRound1Message",
        "ecdsa.keygen.KGRound2Message2",
        "ecdsa.keygen.KGRound3Message",
        "ecdsa.signing.SignRound1Message2",
        "ecdsa.signing.SignRound3Message",
        "ecdsa.signing.SignRound4Message",
        "ecdsa.signing.SignRound5Message",
        "ecdsa.signing.SignRound6Message",
        "ecdsa.signing.SignRound7Message",
        "ecdsa.signing.SignRound8Message",
        "ecdsa.signing.SignRound9Message",
        "ecdsa.resharing.DGRound1Message",
        "ecdsa.resharing.DGRound2Message1",
        "ecdsa.resharing.DGRound2Message2",
        "ecdsa.resharing.DGRound3Message1",
        "ecdsa.resharing.DGRound4Message2",
    )
)

_EDDSA_ROUNDS: dict[str, int] = {
    _PREFIX + "eddsa.keygen.KGRound1Message": 1,
    _PREFIX + "eddsa.keygen.KGRound2Message1": 2,
    _PREFIX + "eddsa.keygen.KGRound2Message2": 3,
    _PREFIX + "eddsa.signing.SignRound1Message": 4,
    _PREFIX + "eddsa.signing.SignRound2Message": 5,
    _PREFIX + "eddsa.signing.SignRound3Message": 6,
    _PREFIX + "eddsa.resharing.DGRound1Message": 7,
    _PREFIX + "eddsa.resharing.DGRound2Message": 8,
    _PREFIX + "eddsa.resharing.DGRound3Message1": 9,
    _PREFIX + "eddsa.resharing.DGRound3Message2": 10,
    _PREFIX + "eddsa.resharing.DGRound4Message": 11,
}

_EDDSA_BROADCASTS: frozenset[str] = frozenset(
    _PREFIX + name
    for name in (
        "eddsa.keygen.KGRound1Message",
        "eddsa.keygen.KGRound2Message2",
        "eddsa.signing.SignRound1Message",
        "eddsa.signing.SignRound2Message",
        "eddsa.signing.SignRound3Message",
        "eddsa.resharing.DGRound1Message",
        "eddsa.resharing.DGRound2Message",
        "eddsa.resharing.DGRound4Message",
    )
)


def _classify(
    msg_bytes: bytes, rounds: dict[str, int], broadcasts: frozenset[str]
) -> tuple[int, bool]:
    envelope = any_pb2.Any()
    try:
        envelope.ParseFromString(bytes(msg_bytes))
    except DecodeError as exc:
        raise ValueError(f"could not decode message: {exc}") from exc
    round_number = rounds.get(envelope.type_url, 0)
    if round_number > 4:
        round_number -= 4
    return round_number, envelope.type_url in broadcasts


def classify_ecdsa_msg(msg_bytes: bytes) -> tuple[int, bool]:
    """The round number and broadcast flag of an encoded ECDSA message."""
    return _classify(msg_bytes, _ECDSA_ROUNDS, _ECDSA_BROADCASTS)


def classify_eddsa_msg(msg_bytes: bytes) -> tuple[int, bool]:
    """The round number and broadcast flag of an encoded EdDSA message."""
    return _classify(msg_bytes, _EDDSA_ROUNDS, _EDDSA_BROADCASTS)