"""The round-driven state machine shared by every protocol party."""

from __future__ import annotations

import abc
import logging
import threading
from typing import Callable

from threshsig.errors import TssError
from threshsig.message import Message, parse_wire_message
from threshsig.params import Parameters
from threshsig.party_id import PartyID

logger = logging.getLogger(__name__)


class Round(abc.ABC):
    """One step of a protocol; rounds chain through ``next_round``."""

    @property
    @abc.abstractmethod
    def params(self) -> Parameters:
        """The parameters of the run."""

    @property
    @abc.abstractmethod
    def round_number(self) -> int:
        """The 1-based number of this round."""

    @abc.abstractmethod
    def start(self) -> None:
        """Begin the round; raise TssError on failure."""

    @abc.abstractmethod
    def update(self) -> None:
        """Process stored messages; raise TssError on failure."""

    @abc.abstractmethod
    def can_accept(self, msg: Message) -> bool:
        """True when ``msg`` belongs to this round."""

    @abc.abstractmethod
    def can_proceed(self) -> bool:
        """True when every message this round needs has arrived."""

    @abc.abstractmethod
    def next_round(self) -> Round | None:
        """The following round, or None when the protocol ends."""

    @abc.abstractmethod
    def waiting_for(self) -> list[PartyID]:
        """Parties whose messages are still missing."""

    @abc.abstractmethod
    def wrap_error(self, err: BaseException | str, *args: PartyID) -> TssError:
        """Wrap ``err`` with this round's context and the given culprits."""


class BaseParty(abc.ABC):
    """A party that advances through rounds as messages arrive."""

    task: str = ""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._round: Round | None = None

    @property
    @abc.abstractmethod
    def party_id(self) -> PartyID | None:
        """The identity of this party."""

    @abc.abstractmethod
    def store_message(self, msg: Message) -> bool:
        """Keep ``msg`` for the rounds; False when it is not accepted."""

    @abc.abstractmethod
    def first_round(self) -> Round:
        """The round the protocol starts with."""

    def running(self) -> bool:
        """True while a round is in progress."""
        return self._round is not None

    def waiting_for(self) -> list[PartyID]:
        """Parties the current round still waits on."""
        with self._lock:
            if self._round is None:
                return []
            return self._round.waiting_for()

    def wrap_error(self, err: BaseException | str, *args: PartyID) -> TssError:
        """Wrap ``err`` with the current round's context, if any."""
        if self._round is None:
            return TssError(err, "", -1, None, args)
        return self._round.wrap_error(err, *args)

    def validate_message(self, msg: Message | None) -> bool:
        """Check a message's content and sender; raise TssError if invalid."""
        if msg is None or msg.content is None:
            raise self.wrap_error(ValueError(f"received nil msg: {msg}"))
        sender = msg.from_party
        if sender is None or not sender.validate_basic():
            raise self.wrap_error(
                ValueError(f"received msg with an invalid sender: {msg}")
            )
        if not msg.validate_basic():
            raise self.wrap_error(
                ValueError(f"message failed ValidateBasic: {msg}"), sender
            )
        return True

    def start(self) -> None:
        """Start the first round."""
        base_start(self, self.task)

    def update(self, msg: Message) -> bool:
        """Feed a parsed message to the party."""
        return base_update(self, msg, self.task)

    def update_from_bytes(
        self, wire_bytes: bytes, from_party: PartyID, is_broadcast: bool
    ) -> bool:
        """Feed raw wire bytes received from ``from_party`` to the party."""
        try:
            msg = parse_wire_message(wire_bytes, from_party, is_broadcast)
        except ValueError as exc:
            raise self.wrap_error(exc) from exc
        return self.update(msg)

    def __str__(self) -> str:
        if self._round is not None:
            return f"round: {self._round.round_number}"
        return "No more rounds"

    def _set_round(self, round: Round) -> None:
        if self._round is not None:
            raise self.wrap_error(ValueError("a round is already set on this party"))
        self._round = round

    def _advance(self) -> None:
        self._round = self._round.next_round()


def base_start(
    party: BaseParty,
    task: str,
    prepare: Callable[[Round], None] | None = None,
) -> None:
    """Start ``party`` at its first round, running ``prepare`` on it first."""
    with party._lock:
        pid = party.party_id
        if pid is None or not pid.validate_basic():
            raise party.wrap_error(
                ValueError(f"could not start. this party has an invalid PartyID: {pid!r}")
            )
        if party._round is not None:
            raise party.wrap_error(
                ValueError(
                    "could not start. this party is in an unexpected state. "
                    "use the constructor and start()"
                )
            )
        round = party.first_round()
        party._set_round(round)
        if prepare is not None:
            prepare(round)
        logger.info("party %s: %s round %d starting", pid, task, 1)
        try:
            round.start()
        finally:
            logger.debug("party %s: %s round %d finished", pid, task, 1)


def base_update(party: BaseParty, msg: Message, task: str) -> bool:
    """Store ``msg`` and advance ``party`` through every round it completes."""
    party.validate_message(msg)
    with party._lock:
        logger.debug("party %s received message: %s", party.party_id, msg)
        if not party.store_message(msg):
            return False
        current = party._round
        if current is None:
            return True
        logger.debug(
            "party %s: %s round %d update", party.party_id, task, current.round_number
        )
        current.update()
        if not current.can_proceed():
            return True
        party._advance()
        following = party._round
        if following is not None:
            following.start()
            logger.info(
                "party %s: %s round %d started",
                party.party_id,
                task,
                following.round_number,
            )
        else:
            logger.info("party %s: %s finished!", party.party_id, task)
    return base_update(party, msg, task)