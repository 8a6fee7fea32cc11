"""Packing of polynomial coefficients into fixed-width little-endian bit strings."""

from __future__ import annotations

from typing import Iterable

from dsakit.arrays import unflatten
from dsakit.field import (
    DEGREE,
    Elem,
    Field,
    NttPolynomial,
    NttVector,
    Polynomial,
    Vector,
)


def _check_width(d: int) -> None:
    if d < 1:
        raise ValueError(f"encoding width must be positive, got {d}")


def encoded_polynomial_size(d: int) -> int:
    """Number of bytes taken by 256 coefficients of ``d`` bits each."""
    _check_width(d)
    return 32 * d


def byte_encode(values: Iterable, d: int) -> bytes:
    """Pack 256 integers (or field elements) of ``d`` bits each into bytes."""
    _check_width(d)
    ints = [int(v) for v in values]
    if len(ints) != DEGREE:
        raise ValueError(f"expected {DEGREE} values, got {len(ints)}")
    limit = 1 << d
    acc = 0
    for position, value in enumerate(ints):
        if not 0 <= value < limit:
            raise ValueError(f"value {value} does not fit in {d} bits")
        acc |= value << (d * position)
    return acc.to_bytes(encoded_polynomial_size(d), "little")


def byte_decode(data: bytes, d: int, q: int) -> list[int]:
    """Unpack 256 integers of ``d`` bits each; 12-bit values are reduced modulo ``q``."""
    size = encoded_polynomial_size(d)
    if len(data) != size:
        raise ValueError(f"expected {size} bytes for width {d}, got {len(data)}")
    acc = int.from_bytes(bytes(data), "little")
    mask = (1 << d) - 1
    values = [(acc >> (d * position)) & mask for position in range(DEGREE)]
    if d == 12:
        values = [value % q for value in values]
    return values


def encode(value, d: int) -> bytes:
    """Encode a polynomial, NTT polynomial or vector of either with width ``d``."""
    if isinstance(value, (Polynomial, NttPolynomial)):
        return byte_encode(value, d)
    if isinstance(value, (Vector, NttVector)):
        _check_width(d)
        return b"".join(encode(poly, d) for poly in value)
    raise TypeError(f"cannot encode {type(value).__name__}")


def decode_polynomial(data: bytes, d: int, field: Field) -> Polynomial:
    """Decode one polynomial over ``field`` from ``d``-bit packed coefficients."""
    return Polynomial(tuple(Elem(v, field) for v in byte_decode(data, d, field.q)))


def decode_vector(data: bytes, d: int, k: int, field: Field) -> Vector:
    """Decode a vector of ``k`` polynomials over ``field``."""
    if k < 1:
        raise ValueError(f"vector length must be positive, got {k}")
    expected = encoded_polynomial_size(d) * k
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    return Vector(
        tuple(decode_polynomial(part, d, field) for part in unflatten(bytes(data), k))
    )