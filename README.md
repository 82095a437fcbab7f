# threshsig

Building blocks for running threshold signature protocols (ECDSA over
secp256k1, EdDSA over Ed25519) between a set of parties that exchange
protocol messages: party identities, run parameters, a message envelope
with a protobuf wire encoding, a round-driven party state machine, and a
queue-based node that carries messages between parties.

## What is in the package

- **Curves** (`threshsig.curve`): `Curve` holds a curve's domain
  parameters (`p`, `n`, `gx`, `gy`, `bit_size`) and reports
  `order_bit_length()`. A registry of named curves is managed with
  `CurveName`, `register_curve`, `get_curve_by_name`, `get_curve_name`
  and `same_curve`. `s256()` and `edwards()` return the two built-in
  curves; `ec()` and `set_curve()` read and change the process-wide
  default (secp256k1 unless changed; `set_curve(None)` raises
  `ValueError`).
- **Party identities** (`threshsig.party_id`): `PartyID` (id, moniker,
  key bytes, index; `key_int`, `validate_basic()`), `new_party_id`,
  `sort_party_ids`, which sorts by key and assigns indexes, and
  `SortedPartyIDs` with `keys`, `find_by_key`, `exclude` and
  `to_unsorted`. `PeerContext` holds the sorted parties of a run.
  `generate_test_party_ids` makes throwaway identities with random keys.
- **Parameters** (`threshsig.params`): `Parameters` for keygen and
  signing (curve, parties, threshold, concurrency, safe-prime timeout,
  random sources, `set_no_proof_mod`, `set_no_proof_fac`), and
  `ReSharingParameters` for moving a key from an old committee to a new
  one (`old_and_new_parties`, `old_and_new_party_count`,
  `is_old_committee`, `is_new_committee`).
- **Messages** (`threshsig.message`): `MessageContent` is the abstract
  base for protocol payloads; a payload class sets `TYPE_NAME` and is made
  known to the decoder with `register_content`. `MessageRouting`,
  `MessageWrapper`, `new_message_wrapper` and `Message` describe and
  carry a message; `Message.wire_bytes()` returns the encoded
  `google.protobuf.Any` envelope, and `parse_wire_message` turns such bytes
  back into a `Message`, raising `ValueError` for undecodable bytes or an
  unregistered type.
- **Party state machine** (`threshsig.party`): `Round` and `BaseParty`
  are abstract bases. `BaseParty` validates, stores and applies incoming
  messages and moves the party from one round to the next (`start`,
  `update`, `update_from_bytes`, `waiting_for`, `running`); the shared
  logic is in `base_start` and `base_update`.
- **Nodes** (`threshsig.node`): `Node` is a named participant with
  `inbox`, `outbox` and `errors` queues, a sender callback run on a
  background thread, `init` and `init_reshare` to build its parameters,
  `process_msg` to feed a message to a party through its wire encoding,
  and `hash_to_int` to cut a digest down to the curve order.
  `create_sorted_party_ids` and `get_local_party_index` derive identities
  from participant names.
- **Routing** (`threshsig.routing`): `classify_ecdsa_msg` and
  `classify_eddsa_msg` read a packed message and return its round number
  and whether it is broadcast.

Errors raised while a protocol runs are `threshsig.errors.TssError`. Each
one carries the task, the round, the party that reported it, and the
parties held responsible.

## What it does not do

The package contains no concrete keygen, signing or resharing rounds, no
`MessageContent` payload types, and no elliptic-curve arithmetic: a
`Curve` is only a record of domain parameters. To run a protocol you
supply your own `Round` and `BaseParty` subclasses and register your own
payload types. There is also no network transport; a `Node` hands
outgoing messages to the sender callback you give it.

## Installation

```
pip install threshsig
```

## Example

```python
from threshsig.curve import s256
from threshsig.node import Node, create_sorted_party_ids

ids = create_sorted_party_ids(["party1", "party2", "party3"])
print([str(pid) for pid in ids])

node = Node("party1", curve=s256())
node.init(["party1", "party2", "party3"], 2, sender=lambda msg: None)
print(node.party_id.index)              # position among the sorted parties
print(node.hash_to_int(b"\xff" * 40))   # digest cut down to the curve order
node.close()
```

## Running the tests

```
pip install -e ".[test]"
pytest
```