"""Number-theoretic transform over the ML-DSA base field."""

from __future__ import annotations

from dsakit.algebra import BASE_FIELD, Q
from dsakit.field import Elem, NttPolynomial, NttVector, Polynomial, Vector

_ZETA = 1753
_INVERSE_256 = 8_347_681


def _bitrev8(x: int) -> int:
    return int(f"{x:08b}"[::-1], 2)


def _zeta_table() -> tuple[int, ...]:
    powers = [pow(_ZETA, i, Q) for i in range(256)]
    # Entry 0 is left as zero, as in the specification's table.
    return (0,) + tuple(powers[_bitrev8(i)] for i in range(1, 256))


ZETAS = _zeta_table()


def _check_field(value) -> None:
    if value.field != BASE_FIELD:
        raise ValueError(f"the transform is defined over q={Q}, got q={value.field.q}")


def _to_elems(values: list[int]) -> tuple[Elem, ...]:
    return tuple(Elem(v, BASE_FIELD) for v in values)


def _ntt_polynomial(poly: Polynomial) -> NttPolynomial:
    _check_field(poly)
    w = [c.value for c in poly]
    m = 0
    for length in (128, 64, 32, 16, 8, 4, 2, 1):
        for start in range(0, 256, 2 * length):
            m += 1
            z = ZETAS[m]
            for j in range(start, start + length):
                t = z * w[j + length] % Q
                w[j + length] = (w[j] - t) % Q
                w[j] = (w[j] + t) % Q
    return NttPolynomial(_to_elems(w))


def _ntt_inverse_polynomial(poly: NttPolynomial) -> Polynomial:
    _check_field(poly)
    w = [c.value for c in poly]
    m = 256
    for length in (1, 2, 4, 8, 16, 32, 64, 128):
        for start in range(0, 256, 2 * length):
            m -= 1
            z = (Q - ZETAS[m]) % Q
            for j in range(start, start + length):
                t = w[j]
                w[j] = (t + w[j + length]) % Q
                w[j + length] = z * (t - w[j + length]) % Q
    return Polynomial(_to_elems([v * _INVERSE_256 % Q for v in w]))


def ntt(value):
    """Transform a polynomial or vector of polynomials into the NTT domain."""
    if isinstance(value, Polynomial):
        return _ntt_polynomial(value)
    if isinstance(value, Vector):
        return NttVector(tuple(_ntt_polynomial(poly) for poly in value))
    raise TypeError(f"cannot transform {type(value).__name__}")


def ntt_inverse(value):
    """Transform an NTT polynomial or NTT vector back to coefficient form."""
    if isinstance(value, NttPolynomial):
        return _ntt_inverse_polynomial(value)
    if isinstance(value, NttVector):
        return Vector(tuple(_ntt_inverse_polynomial(poly) for poly in value))
    raise TypeError(f"cannot inverse-transform {type(value).__name__}")


def multiply_ntt(a: NttPolynomial, b: NttPolynomial) -> NttPolynomial:
    """Multiply two NTT polynomials coefficient by coefficient."""
    if not isinstance(a, NttPolynomial) or not isinstance(b, NttPolynomial):
        raise TypeError("both operands must be NTT polynomials")
    return a * b