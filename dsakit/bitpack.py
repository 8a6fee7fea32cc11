"""Range packing of polynomials whose coefficients lie in [-a, b]."""

from __future__ import annotations

from dsakit.algebra import BASE_FIELD
from dsakit.arrays import unflatten
from dsakit.field import Elem, Polynomial, Vector
from dsakit.packing import byte_decode, byte_encode, encoded_polynomial_size


def _check_bounds(a: int, b: int, q: int) -> None:
    if a < 0 or b < 0:
        raise ValueError(f"range bounds must not be negative, got a={a}, b={b}")
    if a + b >= q:
        raise ValueError(f"range [-{a}, {b}] does not fit in the field of order {q}")


def range_encoding_bits(a: int, b: int) -> int:
    """Bits needed per coefficient to encode values in [-a, b]: bitlen(a + b)."""
    if a < 0 or b < 0:
        raise ValueError(f"range bounds must not be negative, got a={a}, b={b}")
    bits = (a + b).bit_length()
    if bits < 1:
        raise ValueError("an empty range cannot be encoded")
    return bits


def bit_pack(poly: Polynomial, a: int, b: int) -> bytes:
    """Encode a polynomial with coefficients in [-a, b] as b - w per coefficient."""
    if not isinstance(poly, Polynomial):
        raise TypeError(f"expected a Polynomial, got {type(poly).__name__}")
    field = poly.field
    _check_bounds(a, b, field.q)
    bits = range_encoding_bits(a, b)
    upper = Elem(b, field)
    lower = (-Elem(a, field)).value
    shifted = []
    for w in poly:
        if not (w.value <= b or w.value >= lower):
            raise ValueError(f"coefficient {w.value} lies outside [-{a}, {b}]")
        shifted.append((upper - w).value)
    return byte_encode(shifted, bits)


def bit_unpack(data: bytes, a: int, b: int) -> Polynomial:
    """Decode a polynomial packed by :func:`bit_pack` with the same bounds."""
    field = BASE_FIELD
    _check_bounds(a, b, field.q)
    bits = range_encoding_bits(a, b)
    upper = Elem(b, field)
    coeffs = []
    for z in byte_decode(data, bits, field.q):
        if z > a + b:
            raise ValueError(f"encoded value {z} exceeds the range width {a + b}")
        coeffs.append(upper - Elem(z, field))
    return Polynomial(tuple(coeffs))


def bit_pack_vector(vec: Vector, a: int, b: int) -> bytes:
    """Encode every polynomial of a vector and join the results."""
    if not isinstance(vec, Vector):
        raise TypeError(f"expected a Vector, got {type(vec).__name__}")
    return b"".join(bit_pack(poly, a, b) for poly in vec)


def bit_unpack_vector(data: bytes, a: int, b: int, k: int) -> Vector:
    """Decode a vector of ``k`` polynomials packed by :func:`bit_pack_vector`."""
    if k < 1:
        raise ValueError(f"vector length must be positive, got {k}")
    expected = encoded_polynomial_size(range_encoding_bits(a, b)) * k
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    return Vector(tuple(bit_unpack(part, a, b) for part in unflatten(bytes(data), k)))