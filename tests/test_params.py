from datetime import timedelta

from threshsig.curve import edwards, s256
from threshsig.params import Parameters, ReSharingParameters
from threshsig.party_id import PeerContext, new_party_id, sort_party_ids


def _committee(*names):
    return sort_party_ids(
        [new_party_id(n, n, int.from_bytes(n.encode(), "big")) for n in names]
    )


def test_parameters_defaults():
    ids = _committee("p1", "p2", "p3")
    params = Parameters(s256(), PeerContext(ids), ids[0], 3, 1)
    assert params.ec == s256()
    assert params.parties.ids is ids
    assert params.party_id is ids[0]
    assert params.party_count == 3
    assert params.threshold == 1
    assert params.concurrency >= 1
    assert params.safe_prime_gen_timeout == timedelta(minutes=5)
    assert params.nonce == 0
    assert params.no_proof_mod is False
    assert params.no_proof_fac is False


def test_random_sources_return_requested_length():
    ids = _committee("p1")
    params = Parameters(s256(), PeerContext(ids), ids[0], 1, 0)
    assert len(params.rand(32)) == 32
    assert len(params.partial_key_rand(16)) == 16


def test_setters_and_overrides():
    ids = _committee("p1", "p2")
    params = Parameters(
        edwards(),
        PeerContext(ids),
        ids[1],
        2,
        1,
        concurrency=3,
        rand=lambda n: b"\x01" * n,
    )
    params.set_no_proof_mod()
    params.set_no_proof_fac()
    params.safe_prime_gen_timeout = timedelta(seconds=10)
    assert params.no_proof_mod is True
    assert params.no_proof_fac is True
    assert params.concurrency == 3
    assert params.rand(4) == b"\x01\x01\x01\x01"
    assert params.safe_prime_gen_timeout == timedelta(seconds=10)


def _resharing(me_old, me_new_name=None):
    old = _committee("a", "b", "c")
    new = _committee("d", "e")
    me = old[0] if me_old else new_party_id(me_new_name, me_new_name,
                                            int.from_bytes(me_new_name.encode(), "big"))
    params = ReSharingParameters(
        s256(), PeerContext(old), me, 3, 1, PeerContext(new), 2, 1
    )
    return params, old, new


def test_resharing_counts_and_parties():
    params, old, new = _resharing(True)
    assert params.old_parties.ids is old
    assert params.old_party_count == 3
    assert params.new_party_count == 2
    assert params.new_threshold == 1
    assert params.old_and_new_party_count() == 5
    assert params.old_and_new_parties() == list(old) + list(new)


def test_committee_membership_old_member():
    params, _, _ = _resharing(True)
    assert params.is_old_committee() is True
    assert params.is_new_committee() is False


def test_committee_membership_new_member_by_key():
    params, _, new = _resharing(False, "e")
    assert params.party_id is not new[1]
    assert params.is_new_committee() is True
    assert params.is_old_committee() is False


def test_committee_membership_outsider():
    params, _, _ = _resharing(False, "zz")
    assert params.is_old_committee() is False
    assert params.is_new_committee() is False