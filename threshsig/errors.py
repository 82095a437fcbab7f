"""Errors raised while running a protocol round."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from threshsig.party_id import PartyID


class TssError(Exception):
    """A failure in a protocol task, naming the round and any culprit parties."""

    def __init__(
        self,
        cause: BaseException | str | None,
        task: str = "",
        round: int = -1,
        victim: PartyID | None = None,
        culprits: Sequence[PartyID] = (),
    ) -> None:
        super().__init__(cause)
        self.cause = cause
        self.task = task
        self.round = round
        self.victim = victim
        self.culprits = tuple(culprits)
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return "Error is nil"
        victim = "<nil>" if self.victim is None else str(self.victim)
        if self.culprits:
            culprits = "[" + " ".join(str(c) for c in self.culprits) + "]"
            return (
                f"task {self.task}, party {victim}, round {self.round}, "
                f"culprits {culprits}: {self.cause}"
            )
        return f"task {self.task}, party {victim}, round {self.round}: {self.cause}"