"""Parameters of a protocol run: curve, parties, threshold and tuning knobs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable

from threshsig.curve import Curve
from threshsig.party_id import PartyID, PeerContext

DEFAULT_SAFE_PRIME_GEN_TIMEOUT = timedelta(minutes=5)

RandomSource = Callable[[int], bytes]


def _default_concurrency() -> int:
    return os.cpu_count() or 1


@dataclass
class Parameters:
    """Settings shared by all rounds of a keygen or signing run."""

    ec: Curve | None
    parties: PeerContext
    party_id: PartyID
    party_count: int
    threshold: int
    concurrency: int = field(default_factory=_default_concurrency, kw_only=True)
    safe_prime_gen_timeout: timedelta = field(
        default=DEFAULT_SAFE_PRIME_GEN_TIMEOUT, kw_only=True
    )
    nonce: int = field(default=0, kw_only=True)
    no_proof_mod: bool = field(default=False, kw_only=True)
    no_proof_fac: bool = field(default=False, kw_only=True)
    partial_key_rand: RandomSource = field(default=os.urandom, kw_only=True)
    rand: RandomSource = field(default=os.urandom, kw_only=True)

    def set_no_proof_mod(self) -> None:
        """Skip the modulus proof during keygen."""
        self.no_proof_mod = True

    def set_no_proof_fac(self) -> None:
        """Skip the factorization proof during keygen."""
        self.no_proof_fac = True


@dataclass
class ReSharingParameters(Parameters):
    """Settings for moving shares from an old committee to a new one."""

    new_parties: PeerContext
    new_party_count: int
    new_threshold: int

    @property
    def old_parties(self) -> PeerContext:
        return self.parties

    @property
    def old_party_count(self) -> int:
        return self.party_count

    def old_and_new_parties(self) -> list[PartyID]:
        """Every party of both committees, old first."""
        return [*self.parties.ids, *self.new_parties.ids]

    def old_and_new_party_count(self) -> int:
        """Size of both committees together."""
        return self.party_count + self.new_party_count

    def is_old_committee(self) -> bool:
        """True when this party belongs to the old committee."""
        key = self.party_id.key_int
        return any(pid.key_int == key for pid in self.parties.ids)

    def is_new_committee(self) -> bool:
        """True when this party belongs to the new committee."""
        key = self.party_id.key_int
        return any(pid.key_int == key for pid in self.new_parties.ids)