"""Elliptic curves known to the threshold signature scheme."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CurveName(str, enum.Enum):
    """Names under which the built-in curves are registered."""

    SECP256K1 = "secp256k1"
    ED25519 = "ed25519"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Curve:
    """Domain parameters of an elliptic curve group."""

    p: int
    n: int
    gx: int
    gy: int
    bit_size: int

    def order_bit_length(self) -> int:
        """Number of bits in the order of the base point."""
        return self.n.bit_length()


_SECP256K1 = Curve(
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    bit_size=256,
)

_ED25519 = Curve(
    p=2**255 - 19,
    n=2**252 + 27742317777372353535851937790883648493,
    gx=15112221349535400772501151409588531511454012693041857206046113283949847762202,
    gy=46316835694926478169428394003475163141307993866256225615783033603165251855960,
    bit_size=256,
)

_registry: dict[str, Curve] = {
    CurveName.SECP256K1.value: _SECP256K1,
    CurveName.ED25519.value: _ED25519,
}

_current: Curve = _SECP256K1


def _key(name: str | CurveName) -> str:
    return name.value if isinstance(name, CurveName) else str(name)


def _as_name(key: str) -> str | CurveName:
    try:
        return CurveName(key)
    except ValueError:
        return key


def register_curve(name: str | CurveName, curve: Curve) -> None:
    """Register ``curve`` under ``name``, replacing any earlier entry."""
    _registry[_key(name)] = curve


def get_curve_by_name(name: str | CurveName) -> Curve | None:
    """Return the curve registered under ``name``, or None."""
    return _registry.get(_key(name))


def get_curve_name(curve: Curve | None) -> str | CurveName | None:
    """Return the name under which ``curve`` is registered, or None."""
    for key, registered in _registry.items():
        if registered == curve:
            return _as_name(key)
    return None


def same_curve(lhs: Curve | None, rhs: Curve | None) -> bool:
    """True when both curves are known and registered under the same name."""
    left = get_curve_name(lhs)
    right = get_curve_name(rhs)
    if left is None or right is None:
        return False
    return _key(left) == _key(right)


def ec() -> Curve:
    """The curve currently in use; secp256k1 unless changed."""
    return _current


def set_curve(curve: Curve | None) -> None:
    """Change the curve in use. Must be called before a protocol starts."""
    global _current
    if curve is None:
        raise ValueError("set_curve received a nil curve")
    _current = curve


def s256() -> Curve:
    """The secp256k1 curve."""
    return _SECP256K1


def edwards() -> Curve:
    """The ed25519 curve."""
    return _ED25519