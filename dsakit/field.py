"""Arithmetic over a prime field and over degree-256 polynomials built on it.

Elements, polynomials, vectors and matrices are immutable values.  Every
element carries the field it belongs to, and combining values from different
fields raises ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Iterator

DEGREE = 256


@dataclass(frozen=True, slots=True)
class Field:
    """A prime-order field Z_q that reduces products with Barrett reduction."""

    q: int
    barrett_shift: int = dataclass_field(init=False, repr=False, compare=False)
    barrett_multiplier: int = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.q < 2:
            raise ValueError(f"field modulus must be at least 2, got {self.q}")
        shift = 2 * self.q.bit_length()
        object.__setattr__(self, "barrett_shift", shift)
        object.__setattr__(self, "barrett_multiplier", (1 << shift) // self.q)

    def small_reduce(self, x: int) -> int:
        """Reduce a value in [0, 2q) into [0, q)."""
        return x if x < self.q else x - self.q

    def barrett_reduce(self, x: int) -> int:
        """Reduce a product of two field members into [0, q)."""
        quotient = (x * self.barrett_multiplier) >> self.barrett_shift
        return self.small_reduce(x - quotient * self.q)


def _check_same_field(a: Field, b: Field) -> None:
    if a is not b and a != b:
        raise ValueError(f"values belong to different fields ({a.q} and {b.q})")


@dataclass(frozen=True, slots=True)
class Elem:
    """A member of a prime-order field."""

    value: int
    field: Field

    def __int__(self) -> int:
        return self.value

    def __neg__(self) -> Elem:
        return Elem(self.field.small_reduce(self.field.q - self.value), self.field)

    def __add__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        _check_same_field(self.field, other.field)
        return Elem(self.field.small_reduce(self.value + other.value), self.field)

    def __sub__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        _check_same_field(self.field, other.field)
        return Elem(
            self.field.small_reduce(self.value + self.field.q - other.value), self.field
        )

    def __mul__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        _check_same_field(self.field, other.field)
        return Elem(self.field.barrett_reduce(self.value * other.value), self.field)


def _zeros(field: Field) -> tuple[Elem, ...]:
    zero = Elem(0, field)
    return (zero,) * DEGREE


@dataclass(frozen=True, slots=True)
class _Coefficients:
    """256 field elements with coefficient-wise addition and scaling."""

    coeffs: tuple[Elem, ...]

    def __post_init__(self) -> None:
        coeffs = tuple(self.coeffs)
        if len(coeffs) != DEGREE:
            raise ValueError(f"expected {DEGREE} coefficients, got {len(coeffs)}")
        object.__setattr__(self, "coeffs", coeffs)

    @property
    def field(self) -> Field:
        return self.coeffs[0].field

    def __iter__(self) -> Iterator[Elem]:
        return iter(self.coeffs)

    def __len__(self) -> int:
        return DEGREE

    def __getitem__(self, index):
        return self.coeffs[index]

    def __add__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(tuple(x + y for x, y in zip(self.coeffs, other.coeffs)))

    def __sub__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(tuple(x - y for x, y in zip(self.coeffs, other.coeffs)))

    def __neg__(self):
        return type(self)(tuple(-x for x in self.coeffs))

    def __rmul__(self, scalar: object):
        if not isinstance(scalar, Elem):
            return NotImplemented
        return type(self)(tuple(scalar * x for x in self.coeffs))


class Polynomial(_Coefficients):
    """A member of R_q = Z_q[X] / (X^256 + 1) in coefficient form."""

    __slots__ = ()

    @classmethod
    def zero(cls, field: Field) -> Polynomial:
        """The zero polynomial over ``field``."""
        return cls(_zeros(field))


class NttPolynomial(_Coefficients):
    """A member of the NTT algebra T_q, a 256-tuple of field elements."""

    __slots__ = ()

    @classmethod
    def zero(cls, field: Field) -> NttPolynomial:
        """The zero NTT polynomial over ``field``."""
        return cls(_zeros(field))

    def __mul__(self, other: object):
        if not isinstance(other, NttPolynomial):
            return NotImplemented
        return NttPolynomial(tuple(x * y for x, y in zip(self.coeffs, other.coeffs)))


@dataclass(frozen=True, slots=True)
class _PolyVector:
    """A fixed-length sequence of polynomials with element-wise operations."""

    polys: tuple

    def __post_init__(self) -> None:
        polys = tuple(self.polys)
        item_type = self._item_type()
        for poly in polys:
            if not isinstance(poly, item_type):
                raise TypeError(
                    f"{type(self).__name__} holds {item_type.__name__}, "
                    f"got {type(poly).__name__}"
                )
        object.__setattr__(self, "polys", polys)

    @classmethod
    def _item_type(cls) -> type:
        return _Coefficients

    @property
    def field(self) -> Field:
        if not self.polys:
            raise ValueError("an empty vector has no field")
        return self.polys[0].field

    def __iter__(self) -> Iterator:
        return iter(self.polys)

    def __len__(self) -> int:
        return len(self.polys)

    def __getitem__(self, index):
        return self.polys[index]

    def _check_length(self, other: _PolyVector) -> None:
        if len(other.polys) != len(self.polys):
            raise ValueError(
                f"vector lengths differ: {len(self.polys)} and {len(other.polys)}"
            )

    def __add__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        self._check_length(other)
        return type(self)(tuple(x + y for x, y in zip(self.polys, other.polys)))

    def __sub__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        self._check_length(other)
        return type(self)(tuple(x - y for x, y in zip(self.polys, other.polys)))

    def __neg__(self):
        return type(self)(tuple(-x for x in self.polys))

    def __rmul__(self, scalar: object):
        if not isinstance(scalar, Elem):
            return NotImplemented
        return type(self)(tuple(scalar * x for x in self.polys))


def _check_count(k: int) -> None:
    if k < 0:
        raise ValueError(f"vector length must not be negative, got {k}")


class Vector(_PolyVector):
    """A vector of polynomials from R_q."""

    __slots__ = ()

    @classmethod
    def _item_type(cls) -> type:
        return Polynomial

    @classmethod
    def zero(cls, field: Field, k: int) -> Vector:
        """The zero vector of ``k`` polynomials over ``field``."""
        _check_count(k)
        return cls(tuple(Polynomial.zero(field) for _ in range(k)))


class NttVector(_PolyVector):
    """A vector of NTT polynomials; ``@`` between two of them is a dot product."""

    __slots__ = ()

    @classmethod
    def _item_type(cls) -> type:
        return NttPolynomial

    @classmethod
    def zero(cls, field: Field, k: int) -> NttVector:
        """The zero NTT vector of ``k`` polynomials over ``field``."""
        _check_count(k)
        return cls(tuple(NttPolynomial.zero(field) for _ in range(k)))

    def __rmul__(self, scalar: object):
        if not isinstance(scalar, (Elem, NttPolynomial)):
            return NotImplemented
        return NttVector(tuple(scalar * x for x in self.polys))

    def __matmul__(self, other: object):
        if not isinstance(other, NttVector):
            return NotImplemented
        self._check_length(other)
        total = NttPolynomial.zero(self.field)
        for x, y in zip(self.polys, other.polys):
            total = total + x * y
        return total


@dataclass(frozen=True, slots=True)
class NttMatrix:
    """A K x L matrix of NTT polynomials stored as rows; ``matrix @ vector`` multiplies."""

    rows: tuple[NttVector, ...]

    def __post_init__(self) -> None:
        rows = tuple(self.rows)
        for row in rows:
            if not isinstance(row, NttVector):
                raise TypeError(f"matrix rows must be NttVector, got {type(row).__name__}")
        object.__setattr__(self, "rows", rows)

    def __iter__(self) -> Iterator[NttVector]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    def __matmul__(self, other: object):
        if not isinstance(other, NttVector):
            return NotImplemented
        return NttVector(tuple(row @ other for row in self.rows))