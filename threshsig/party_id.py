"""Identities of protocol participants and their sorted sets."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Iterable


def _int_to_bytes(value: int) -> bytes:
    value = abs(value)
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


@dataclass(eq=False)
class PartyID:
    """A participant: a unique id, a display moniker, a key and its sorted index."""

    id: str
    moniker: str
    key: bytes | None
    index: int = -1

    @property
    def key_int(self) -> int:
        """The key as a non-negative integer."""
        return int.from_bytes(self.key or b"", "big")

    def validate_basic(self) -> bool:
        """True when the party has a key and a known index."""
        return self.key is not None and self.index >= 0

    def __str__(self) -> str:
        return f"{{{self.index},{self.moniker}}}"


class SortedPartyIDs(list):
    """Party identities sorted by key in ascending order."""

    def keys(self) -> list[int]:
        """The keys of all parties as integers."""
        return [pid.key_int for pid in self]

    def find_by_key(self, key: int) -> PartyID | None:
        """The party with the given key, or None."""
        return next((pid for pid in self if pid.key_int == key), None)

    def exclude(self, exclude: PartyID) -> SortedPartyIDs:
        """A copy without any party sharing the key of ``exclude``."""
        key = exclude.key_int
        return SortedPartyIDs(pid for pid in self if pid.key_int != key)

    def to_unsorted(self) -> list[PartyID]:
        """The parties as a plain list."""
        return list(self)


@dataclass
class PeerContext:
    """The set of parties taking part in a protocol run."""

    ids: SortedPartyIDs


def new_party_id(id: str, moniker: str, key: int) -> PartyID:
    """Create a party whose index is not yet known."""
    return PartyID(id=id, moniker=moniker, key=_int_to_bytes(key), index=-1)


def sort_party_ids(ids: Iterable[PartyID], start_at: int = 0) -> SortedPartyIDs:
    """Sort parties by key and assign consecutive indexes from ``start_at``."""
    ordered = SortedPartyIDs(sorted(ids, key=lambda pid: pid.key_int))
    for offset, pid in enumerate(ordered):
        pid.index = offset + start_at
    return ordered


def generate_test_party_ids(count: int, start_at: int = 0) -> SortedPartyIDs:
    """Generate ``count`` parties with random, closely spaced keys."""
    base = secrets.randbits(256)
    ids = [
        PartyID(
            id=str(i + 1),
            moniker=f"P[{i + 1}]",
            key=_int_to_bytes(base - (count - i)),
            index=i,
        )
        for i in range(start_at, count + start_at)
    ]
    return sort_party_ids(ids, start_at)