"""Rounding, decomposition and norms over the ML-DSA base field."""

from __future__ import annotations

from typing import Callable

from dsakit.field import Elem, Field, Polynomial, Vector

BASE_FIELD = Field(8_380_417)
Q = BASE_FIELD.q

# Number of bits dropped from t by Power2Round.
D = 13

# Sizes of the fixed-width seeds and digests used throughout.
B32_SIZE = 32
B64_SIZE = 64


def barrett_reduce(x: int, m: int) -> int:
    """Reduce ``x`` (below m^2) modulo ``m`` using Barrett reduction."""
    if m < 1:
        raise ValueError(f"modulus must be positive, got {m}")
    shift = 2 * m.bit_length()
    multiplier = (1 << shift) // m
    quotient = (x * multiplier) >> shift
    remainder = x - quotient * m
    return remainder if remainder < m else remainder - m


def _map(value, fn: Callable[[Elem], Elem]):
    if isinstance(value, Elem):
        return fn(value)
    if isinstance(value, Polynomial):
        return Polynomial(tuple(fn(x) for x in value))
    if isinstance(value, Vector):
        return Vector(tuple(_map(poly, fn) for poly in value))
    raise TypeError(f"unsupported value of type {type(value).__name__}")


def _elem_mod_plus_minus(x: Elem, m: int) -> Elem:
    raw = Elem(barrett_reduce(x.value, m), x.field)
    if raw.value <= m >> 1:
        return raw
    return raw - Elem(m, x.field)


def mod_plus_minus(value, m: int):
    """Centered reduction modulo ``m``, into (-m/2, m/2], represented mod q."""
    return _map(value, lambda x: _elem_mod_plus_minus(x, m))


def decompose(x: Elem, two_gamma2: int) -> tuple[Elem, Elem]:
    """Split ``x`` into high and low parts so that x = r1 * 2*gamma2 + r0 (mod q)."""
    r0 = _elem_mod_plus_minus(x, two_gamma2)
    diff = x - r0
    if diff.value == x.field.q - 1:
        return Elem(0, x.field), r0 - Elem(1, x.field)
    return Elem(diff.value // two_gamma2, x.field), r0


def _elem_infinity_norm(x: Elem) -> int:
    q = x.field.q
    return x.value if x.value <= q >> 1 else q - x.value


def infinity_norm(value) -> int:
    """Largest absolute centered coefficient of an element, polynomial or vector."""
    if isinstance(value, Elem):
        return _elem_infinity_norm(value)
    if isinstance(value, Polynomial):
        return max(_elem_infinity_norm(x) for x in value)
    if isinstance(value, Vector):
        if not len(value):
            raise ValueError("an empty vector has no norm")
        return max(infinity_norm(poly) for poly in value)
    raise TypeError(f"unsupported value of type {type(value).__name__}")


def _elem_power2round(x: Elem) -> tuple[Elem, Elem]:
    r0 = _elem_mod_plus_minus(x, 1 << D)
    r1 = Elem((x - r0).value >> D, x.field)
    return r1, r0


def power2round(value):
    """Split into (r1, r0) with value = r1 * 2^13 + r0 and r0 centered."""
    if isinstance(value, Elem):
        return _elem_power2round(value)
    if isinstance(value, Polynomial):
        highs, lows = zip(*(_elem_power2round(x) for x in value))
        return Polynomial(highs), Polynomial(lows)
    if isinstance(value, Vector):
        pairs = [power2round(poly) for poly in value]
        return Vector(tuple(p[0] for p in pairs)), Vector(tuple(p[1] for p in pairs))
    raise TypeError(f"unsupported value of type {type(value).__name__}")


def high_bits(value, two_gamma2: int):
    """High part of the decomposition, coefficient by coefficient."""
    return _map(value, lambda x: decompose(x, two_gamma2)[0])


def low_bits(value, two_gamma2: int):
    """Low part of the decomposition, coefficient by coefficient."""
    return _map(value, lambda x: decompose(x, two_gamma2)[1])