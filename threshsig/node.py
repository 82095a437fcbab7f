"""A participant that owns its queues and talks to a protocol party."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Iterable

from threshsig.curve import Curve
from threshsig.message import Message
from threshsig.params import Parameters, ReSharingParameters
from threshsig.party_id import (
    PartyID,
    PeerContext,
    SortedPartyIDs,
    new_party_id,
    sort_party_ids,
)

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000

Sender = Callable[[Message], None]

_CLOSED = object()
_PUT_POLL_SECONDS = 0.1


def _key_of(name: str) -> int:
    return int.from_bytes(name.encode(), "big")


def create_sorted_party_ids(participants: Iterable[str]) -> SortedPartyIDs:
    """Party identities for ``participants``, keyed by their names and sorted."""
    return sort_party_ids(
        new_party_id(name, name, _key_of(name)) for name in participants
    )


def get_local_party_index(party_ids: Iterable[PartyID], party_id: str) -> int:
    """The position of ``party_id`` among ``party_ids``, or -1 if absent."""
    return next(
        (position for position, pid in enumerate(party_ids) if pid.id == party_id),
        -1,
    )


class Node:
    """A named participant with inbound, outbound and error queues."""

    def __init__(self, party_id: str, curve: Curve | None = None) -> None:
        self.party_id = new_party_id(party_id, party_id, _key_of(party_id))
        self.curve = curve
        self.params: Parameters | None = None
        self.reshare_params: ReSharingParameters | None = None
        self.sender: Sender | None = None
        self.inbox: queue.Queue[Any] = queue.Queue(DEFAULT_QUEUE_SIZE)
        self.outbox: queue.Queue[Any] = queue.Queue(DEFAULT_QUEUE_SIZE)
        self.errors: queue.Queue[Any] = queue.Queue(DEFAULT_QUEUE_SIZE)
        self._closed = threading.Event()
        self._dispatcher: threading.Thread | None = None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def on_msg(self, msg: Message) -> None:
        """Queue an incoming message; dropped once the node is closed."""
        while not self._closed.is_set():
            try:
                self.inbox.put(msg, timeout=_PUT_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def send_messages(self) -> None:
        """Hand every outgoing message to the sender until the node closes."""
        while True:
            msg = self.outbox.get()
            if msg is _CLOSED or self._closed.is_set():
                return
            if self.sender is not None:
                self.sender(msg)

    def notify_errors(self) -> list[BaseException]:
        """Log every reported error until the node closes; return them."""
        seen: list[BaseException] = []
        for err in iter(self.errors.get, _CLOSED):
            logger.warning("Party %s received error: %s", self.party_id.id, err)
            seen.append(err)
        return seen

    def close(self) -> None:
        """Stop dispatching and release anything waiting on the queues."""
        if self._closed.is_set():
            return
        self._closed.set()
        for channel in (self.inbox, self.outbox, self.errors):
            try:
                channel.put_nowait(_CLOSED)
            except queue.Full:
                # Make room so that a waiting consumer still sees the end marker.
                try:
                    channel.get_nowait()
                except queue.Empty:
                    pass
                channel.put_nowait(_CLOSED)

    def _start_dispatcher(self) -> None:
        if self._dispatcher is not None and self._dispatcher.is_alive():
            return
        self._dispatcher = threading.Thread(
            target=self.send_messages,
            name=f"node-{self.party_id.id}-sender",
            daemon=True,
        )
        self._dispatcher.start()

    def init(
        self, participants: list[str], threshold: int, sender: Sender | None
    ) -> None:
        """Prepare for keygen or signing among ``participants``."""
        sorted_ids = create_sorted_party_ids(participants)
        self.party_id.index = get_local_party_index(sorted_ids, self.party_id.id)
        self.params = Parameters(
            self.curve,
            PeerContext(sorted_ids),
            self.party_id,
            len(participants),
            threshold,
        )
        self.sender = sender
        self._start_dispatcher()

    def init_reshare(
        self,
        old_participants: list[str],
        new_participants: list[str],
        old_threshold: int,
        new_threshold: int,
        sender: Sender | None,
    ) -> None:
        """Prepare for moving shares from the old committee to the new one."""
        old_ids = create_sorted_party_ids(old_participants)
        new_ids = create_sorted_party_ids(new_participants)
        if self.party_id.index == -1:
            self.party_id.index = get_local_party_index(new_ids, self.party_id.id)
        self.reshare_params = ReSharingParameters(
            ec=self.curve,
            parties=PeerContext(old_ids),
            party_id=self.party_id,
            party_count=len(old_participants),
            threshold=old_threshold,
            new_parties=PeerContext(new_ids),
            new_party_count=len(new_participants),
            new_threshold=new_threshold,
        )
        self.sender = sender
        self._start_dispatcher()

    def process_msg(self, local_party: Any, msg: Message) -> bool:
        """Feed ``msg`` to ``local_party`` through its wire encoding."""
        wire_bytes, _ = msg.wire_bytes()
        return bool(
            local_party.update_from_bytes(wire_bytes, msg.from_party, msg.is_broadcast)
        )

    def hash_to_int(self, digest: bytes) -> int | None:
        """Reduce a hash to an integer no wider than the curve order."""
        if self.curve is None:
            return None
        order_bits = self.curve.order_bit_length()
        order_bytes = (order_bits + 7) // 8
        digest = bytes(digest)[:order_bytes]
        value = int.from_bytes(digest, "big")
        excess = len(digest) * 8 - order_bits
        if excess > 0:
            value >>= excess
        return value