import pytest

from threshsig.curve import (
    Curve,
    CurveName,
    ec,
    edwards,
    get_curve_by_name,
    get_curve_name,
    register_curve,
    s256,
    same_curve,
    set_curve,
)


def test_lookup_builtin_curves_by_name():
    assert get_curve_by_name(CurveName.SECP256K1) == s256()
    assert get_curve_by_name("ed25519") == edwards()


def test_unknown_name_gives_none():
    assert get_curve_by_name("no-such-curve") is None


def test_get_curve_name_of_builtins():
    assert get_curve_name(s256()) == CurveName.SECP256K1
    assert get_curve_name(edwards()) == CurveName.ED25519


def test_get_curve_name_of_unknown_curve():
    stray = Curve(p=23, n=29, gx=1, gy=2, bit_size=5)
    assert get_curve_name(stray) is None
    assert get_curve_name(None) is None


def test_same_curve():
    assert same_curve(s256(), s256()) is True
    assert same_curve(s256(), edwards()) is False
    stray = Curve(p=23, n=29, gx=1, gy=2, bit_size=5)
    assert same_curve(stray, stray) is False


def test_register_curve_round_trip():
    custom = Curve(p=101, n=97, gx=3, gy=4, bit_size=7)
    register_curve("toy-curve", custom)
    assert get_curve_by_name("toy-curve") == custom
    assert get_curve_name(custom) == "toy-curve"
    assert same_curve(custom, Curve(p=101, n=97, gx=3, gy=4, bit_size=7))


def test_default_curve_is_secp256k1():
    assert ec() == s256()


def test_set_curve_changes_default_and_rejects_none():
    try:
        set_curve(edwards())
        assert ec() == edwards()
        with pytest.raises(ValueError):
            set_curve(None)
        assert ec() == edwards()
    finally:
        set_curve(s256())
    assert ec() == s256()


def test_order_bit_lengths():
    assert s256().order_bit_length() == 256
    assert edwards().order_bit_length() == 253


def test_secp256k1_generator_on_curve():
    c = s256()
    assert (c.gy * c.gy - c.gx**3 - 7) % c.p == 0
    assert c.gx < c.p and c.gy < c.p


def test_ed25519_generator_on_curve():
    c = edwards()
    d = (-121665 * pow(121666, -1, c.p)) % c.p
    x2 = c.gx * c.gx % c.p
    y2 = c.gy * c.gy % c.p
    assert (-x2 + y2 - 1 - d * x2 * y2) % c.p == 0