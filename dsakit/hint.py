"""Hints that let a verifier recover the high bits of w from an approximation."""

from __future__ import annotations

from dataclasses import dataclass

from dsakit.algebra import BASE_FIELD, Q, decompose, high_bits
from dsakit.field import DEGREE, Elem, Polynomial, Vector
from dsakit.params import ParameterSet


def make_hint(z: Elem, r: Elem, two_gamma2: int) -> bool:
    """Whether adding ``z`` to ``r`` changes its high bits."""
    return high_bits(r, two_gamma2) != high_bits(r + z, two_gamma2)


def use_hint(h: bool, r: Elem, two_gamma2: int) -> Elem:
    """Correct the high bits of ``r`` according to the hint bit ``h``."""
    m = (Q - 1) // two_gamma2
    r1, r0 = decompose(r, two_gamma2)
    if not h:
        return r1
    gamma2 = two_gamma2 // 2
    if r0.value <= gamma2:
        return Elem((r1.value + 1) % m, r.field)
    if r0.value >= Q - gamma2:
        return Elem((r1.value + m - 1) % m, r.field)
    # r0 is a centered residue, so it always lies in [-gamma2, gamma2].
    raise RuntimeError(f"low bits {r0.value} lie outside [-gamma2, gamma2]")


def _monotonic(values) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


@dataclass(frozen=True)
class Hint:
    """One hint bit per coefficient of a K-vector of polynomials."""

    params: ParameterSet
    bits: tuple[tuple[bool, ...], ...]

    def __post_init__(self) -> None:
        bits = tuple(tuple(bool(b) for b in row) for row in self.bits)
        if len(bits) != self.params.k:
            raise ValueError(f"hint must have {self.params.k} rows, got {len(bits)}")
        if any(len(row) != DEGREE for row in bits):
            raise ValueError(f"every hint row must have {DEGREE} bits")
        object.__setattr__(self, "bits", bits)

    @classmethod
    def empty(cls, params: ParameterSet) -> Hint:
        """A hint with every bit cleared."""
        return cls(params, ((False,) * DEGREE,) * params.k)

    @classmethod
    def from_vectors(cls, params: ParameterSet, z: Vector, r: Vector) -> Hint:
        """Compute the hint for adding ``z`` to ``r``, coefficient by coefficient."""
        if len(z) != params.k or len(r) != params.k:
            raise ValueError(f"vectors must hold {params.k} polynomials")
        return cls(
            params,
            tuple(
                tuple(make_hint(zc, rc, params.two_gamma2) for zc, rc in zip(zp, rp))
                for zp, rp in zip(z, r)
            ),
        )

    def hamming_weight(self) -> int:
        """Number of bits that are set."""
        return sum(sum(row) for row in self.bits)

    def use_hint(self, r: Vector) -> Vector:
        """Apply the hint to ``r``, returning corrected high bits."""
        if len(r) != self.params.k:
            raise ValueError(f"vector must hold {self.params.k} polynomials")
        two_gamma2 = self.params.two_gamma2
        return Vector(
            tuple(
                Polynomial(tuple(use_hint(h, c, two_gamma2) for h, c in zip(row, poly)))
                for row, poly in zip(self.bits, r)
            )
        )

    def bit_pack(self) -> bytes:
        """Encode as set-bit positions followed by one running count per row."""
        omega = self.params.omega
        if self.hamming_weight() > omega:
            raise ValueError(f"hint has more than omega={omega} bits set")
        indices: list[int] = []
        cuts: list[int] = []
        for row in self.bits:
            indices.extend(j for j, bit in enumerate(row) if bit)
            cuts.append(len(indices))
        return bytes(indices) + bytes(omega - len(indices)) + bytes(cuts)

    @classmethod
    def bit_unpack(cls, params: ParameterSet, y: bytes) -> Hint | None:
        """Decode a packed hint, or return None if the encoding is malformed."""
        indices, cuts = params.split_hint(y)
        indices = list(indices)
        cuts = list(cuts)
        max_cut = max(cuts)
        if not _monotonic(cuts) or max_cut > len(indices) or any(indices[max_cut:]):
            return None

        rows = [[False] * DEGREE for _ in range(params.k)]
        start = 0
        for row, end in zip(rows, cuts):
            segment = indices[start:end]
            if not _monotonic(segment):
                return None
            for j in segment:
                row[j] = True
            start = end
        return cls(params, tuple(tuple(row) for row in rows))


__all__ = ["Hint", "make_hint", "use_hint", "BASE_FIELD"]