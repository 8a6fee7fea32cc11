"""Pseudorandom sampling of polynomials, vectors and matrices from seeds."""

from __future__ import annotations

from dsakit.algebra import BASE_FIELD, Q
from dsakit.arrays import truncate
from dsakit.bitpack import bit_unpack, range_encoding_bits
from dsakit.field import DEGREE, Elem, NttMatrix, NttPolynomial, NttVector, Polynomial, Vector
from dsakit.packing import encoded_polynomial_size
from dsakit.params import Eta
from dsakit.xof import shake128_state, shake256_state

_ZERO = Elem(0, BASE_FIELD)
_ONE = Elem(1, BASE_FIELD)
_MINUS_ONE = Elem(Q - 1, BASE_FIELD)
_SMALL = {0: _ZERO, 1: _ONE, -1: _MINUS_ONE}

_MAX_TAU = 64
_U16_MAX = 0xFFFF


def _check_byte(value: int, name: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must fit in one byte, got {value}")
    return value


def _check_u16(value: int, name: str) -> int:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must fit in 16 bits, got {value}")
    return value


def _check_count(count: int, name: str) -> None:
    if count < 1:
        raise ValueError(f"{name} must be positive, got {count}")


def coeff_from_three_bytes(b: bytes) -> Elem | None:
    """A field element from three bytes (top bit ignored), or None if it is not below q."""
    b = bytes(b)
    if len(b) != 3:
        raise ValueError(f"expected 3 bytes, got {len(b)}")
    z = int.from_bytes(b, "little") & 0x7FFFFF
    return Elem(z, BASE_FIELD) if z < Q else None


def coeff_from_half_byte(b: int, eta: Eta) -> Elem | None:
    """A coefficient in [-eta, eta] from a half byte, or None if ``b`` is rejected."""
    _check_byte(b, "half byte")
    eta = Eta(eta)
    if eta is Eta.TWO and b < 15:
        b %= 5
        return Elem(2 - b, BASE_FIELD) if b <= 2 else -Elem(b - 2, BASE_FIELD)
    if eta is Eta.FOUR and b < 9:
        return Elem(4 - b, BASE_FIELD) if b <= 4 else -Elem(b - 4, BASE_FIELD)
    return None


def sample_in_ball(rho: bytes, tau: int) -> Polynomial:
    """A polynomial with exactly ``tau`` coefficients in {-1, 1} and the rest zero."""
    if not 0 <= tau <= _MAX_TAU:
        raise ValueError(f"tau must lie in [0, {_MAX_TAU}], got {tau}")
    ctx = shake256_state().absorb(bytes(rho))
    signs = int.from_bytes(ctx.squeeze(8), "little")

    coeffs = [0] * DEGREE
    for i in range(DEGREE - tau, DEGREE):
        j = ctx.squeeze(1)[0]
        while j > i:
            j = ctx.squeeze(1)[0]
        coeffs[i] = coeffs[j]
        coeffs[j] = -1 if (signs >> (i + tau - DEGREE)) & 1 else 1

    return Polynomial(tuple(_SMALL[c] for c in coeffs))


def rej_ntt_poly(rho: bytes, r: int, s: int) -> NttPolynomial:
    """A uniformly sampled NTT polynomial for matrix position (r, s)."""
    _check_byte(r, "row index")
    _check_byte(s, "column index")
    ctx = shake128_state().absorb(bytes(rho)).absorb(bytes([s])).absorb(bytes([r]))
    coeffs: list[Elem] = []
    while len(coeffs) < DEGREE:
        x = coeff_from_three_bytes(ctx.squeeze(3))
        if x is not None:
            coeffs.append(x)
    return NttPolynomial(tuple(coeffs))


def rej_bounded_poly(rho: bytes, eta: Eta, r: int) -> Polynomial:
    """A polynomial with coefficients sampled in [-eta, eta]."""
    _check_u16(r, "nonce")
    eta = Eta(eta)
    ctx = shake256_state().absorb(bytes(rho)).absorb(r.to_bytes(2, "little"))
    coeffs: list[Elem] = []
    while len(coeffs) < DEGREE:
        z = ctx.squeeze(1)[0]
        for half in (z & 0x0F, z >> 4):
            if len(coeffs) == DEGREE:
                break
            c = coeff_from_half_byte(half, eta)
            if c is not None:
                coeffs.append(c)
    return Polynomial(tuple(coeffs))


def expand_a(rho: bytes, k: int, l: int) -> NttMatrix:  # noqa: E741
    """The K x L public matrix A in the NTT domain."""
    _check_count(k, "k")
    _check_count(l, "l")
    return NttMatrix(
        tuple(
            NttVector(
                tuple(rej_ntt_poly(rho, truncate(r, 8), truncate(s, 8)) for s in range(l))
            )
            for r in range(k)
        )
    )


def expand_s(rho: bytes, eta: Eta, base: int, count: int) -> Vector:
    """A vector of ``count`` short polynomials using nonces base, base + 1, ..."""
    _check_count(count, "count")
    if base < 0:
        raise ValueError(f"base must not be negative, got {base}")
    return Vector(
        tuple(rej_bounded_poly(rho, eta, truncate(r + base, 16)) for r in range(count))
    )


def expand_mask(rho: bytes, mu: int, gamma1: int, count: int) -> Vector:
    """A mask vector of ``count`` polynomials with coefficients in [-(gamma1 - 1), gamma1]."""
    _check_count(count, "count")
    _check_u16(mu, "mu")
    if gamma1 < 2:
        raise ValueError(f"gamma1 must be at least 2, got {gamma1}")
    size = encoded_polynomial_size(range_encoding_bits(gamma1 - 1, gamma1))
    polys = []
    for r in range(count):
        nonce = _check_u16(mu + truncate(r, 16), "mask nonce")
        sample = (
            shake256_state()
            .absorb(bytes(rho))
            .absorb(nonce.to_bytes(2, "little"))
            .squeeze(size)
        )
        polys.append(bit_unpack(sample, gamma1 - 1, gamma1))
    return Vector(tuple(polys))