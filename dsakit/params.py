"""Parameter sets for ML-DSA and the encodings whose sizes depend on them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from itertools import accumulate
from typing import Sequence

from dsakit.algebra import B32_SIZE, B64_SIZE, BASE_FIELD, D, Q
from dsakit.bitpack import bit_pack_vector, bit_unpack, bit_unpack_vector, range_encoding_bits
from dsakit.field import Polynomial, Vector
from dsakit.packing import decode_vector, encode, encoded_polynomial_size

# t0 coefficients lie in [-(2^(d-1) - 1), 2^(d-1)].
T0_LOWER = (1 << (D - 1)) - 1
T0_UPPER = 1 << (D - 1)

# t1 coefficients take bitlen(q - 1) - d bits.
T1_BITS = Q.bit_length() - D


class Eta(IntEnum):
    """Bound on the coefficients of the private vectors s1 and s2."""

    TWO = 2
    FOUR = 4


def _check_bytes(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return data


def _check_vector(vec: Vector, size: int, name: str) -> None:
    if not isinstance(vec, Vector):
        raise TypeError(f"{name} must be a Vector, got {type(vec).__name__}")
    if len(vec) != size:
        raise ValueError(f"{name} must hold {size} polynomials, got {len(vec)}")


def _split(data: bytes, sizes: Sequence[int]) -> tuple[bytes, ...]:
    ends = list(accumulate(sizes))
    starts = [0, *ends[:-1]]
    return tuple(data[start:end] for start, end in zip(starts, ends))


@dataclass(frozen=True)
class ParameterSet:
    """The parameters describing one instance of ML-DSA.

    ``lambda_size`` is the length of ``c_tilde`` in bytes (lambda / 4).
    """

    k: int
    l: int  # noqa: E741
    eta: Eta
    gamma1: int
    gamma2: int
    two_gamma2: int
    w1_bits: int
    lambda_size: int
    omega: int
    tau: int

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "eta", Eta(self.eta))
        except ValueError:
            raise ValueError(f"eta must be 2 or 4, got {self.eta}") from None
        for name in ("k", "l", "gamma1", "gamma2", "w1_bits", "lambda_size", "omega", "tau"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.two_gamma2 != 2 * self.gamma2:
            raise ValueError(
                f"two_gamma2 must be twice gamma2, got {self.two_gamma2} and {self.gamma2}"
            )
        if self.tau > 256:
            raise ValueError(f"tau must not exceed 256, got {self.tau}")
        if self.gamma1_minus_beta < 0 or self.gamma2_minus_beta < 0:
            raise ValueError("beta must not exceed gamma1 or gamma2")

    # Derived constants

    @property
    def beta(self) -> int:
        """tau * eta."""
        return self.tau * int(self.eta)

    @property
    def gamma1_minus_beta(self) -> int:
        return self.gamma1 - self.beta

    @property
    def gamma2_minus_beta(self) -> int:
        return self.gamma2 - self.beta

    # Sizes of encodings

    @property
    def _eta_poly_size(self) -> int:
        return encoded_polynomial_size(range_encoding_bits(self.eta, self.eta))

    @property
    def mask_sample_size(self) -> int:
        """Bytes of XOF output unpacked into one mask polynomial."""
        return encoded_polynomial_size(range_encoding_bits(self.gamma1 - 1, self.gamma1))

    @property
    def s1_size(self) -> int:
        return self._eta_poly_size * self.l

    @property
    def s2_size(self) -> int:
        return self._eta_poly_size * self.k

    @property
    def t0_size(self) -> int:
        return encoded_polynomial_size(range_encoding_bits(T0_LOWER, T0_UPPER)) * self.k

    @property
    def signing_key_size(self) -> int:
        return 2 * B32_SIZE + B64_SIZE + self.s1_size + self.s2_size + self.t0_size

    @property
    def t1_size(self) -> int:
        return encoded_polynomial_size(T1_BITS) * self.k

    @property
    def verifying_key_size(self) -> int:
        return B32_SIZE + self.t1_size

    @property
    def w1_size(self) -> int:
        return encoded_polynomial_size(self.w1_bits) * self.k

    @property
    def z_size(self) -> int:
        return self.mask_sample_size * self.l

    @property
    def hint_size(self) -> int:
        return self.omega + self.k

    @property
    def signature_size(self) -> int:
        return self.lambda_size + self.z_size + self.hint_size

    # Mask sampling

    def unpack_mask(self, data: bytes) -> Polynomial:
        """Unpack one mask polynomial with coefficients in [-(gamma1 - 1), gamma1]."""
        data = _check_bytes(data, self.mask_sample_size, "mask sample")
        return bit_unpack(data, self.gamma1 - 1, self.gamma1)

    # Signing key

    def encode_s1(self, s1: Vector) -> bytes:
        _check_vector(s1, self.l, "s1")
        return bit_pack_vector(s1, self.eta, self.eta)

    def decode_s1(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.s1_size, "encoded s1")
        return bit_unpack_vector(enc, self.eta, self.eta, self.l)

    def encode_s2(self, s2: Vector) -> bytes:
        _check_vector(s2, self.k, "s2")
        return bit_pack_vector(s2, self.eta, self.eta)

    def decode_s2(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.s2_size, "encoded s2")
        return bit_unpack_vector(enc, self.eta, self.eta, self.k)

    def encode_t0(self, t0: Vector) -> bytes:
        _check_vector(t0, self.k, "t0")
        return bit_pack_vector(t0, T0_LOWER, T0_UPPER)

    def decode_t0(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.t0_size, "encoded t0")
        return bit_unpack_vector(enc, T0_LOWER, T0_UPPER, self.k)

    def concat_sk(
        self, rho: bytes, key: bytes, tr: bytes, s1: bytes, s2: bytes, t0: bytes
    ) -> bytes:
        """Join the parts of a signing key into its byte encoding."""
        return b"".join(
            (
                _check_bytes(rho, B32_SIZE, "rho"),
                _check_bytes(key, B32_SIZE, "key"),
                _check_bytes(tr, B64_SIZE, "tr"),
                _check_bytes(s1, self.s1_size, "encoded s1"),
                _check_bytes(s2, self.s2_size, "encoded s2"),
                _check_bytes(t0, self.t0_size, "encoded t0"),
            )
        )

    def split_sk(self, enc: bytes) -> tuple[bytes, bytes, bytes, bytes, bytes, bytes]:
        """Split an encoded signing key into (rho, key, tr, s1, s2, t0)."""
        enc = _check_bytes(enc, self.signing_key_size, "encoded signing key")
        return _split(
            enc, (B32_SIZE, B32_SIZE, B64_SIZE, self.s1_size, self.s2_size, self.t0_size)
        )

    # Verifying key

    def encode_t1(self, t1: Vector) -> bytes:
        _check_vector(t1, self.k, "t1")
        return encode(t1, T1_BITS)

    def decode_t1(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.t1_size, "encoded t1")
        return decode_vector(enc, T1_BITS, self.k, BASE_FIELD)

    def concat_vk(self, rho: bytes, t1: bytes) -> bytes:
        return _check_bytes(rho, B32_SIZE, "rho") + _check_bytes(t1, self.t1_size, "encoded t1")

    def split_vk(self, enc: bytes) -> tuple[bytes, bytes]:
        """Split an encoded verifying key into (rho, t1)."""
        enc = _check_bytes(enc, self.verifying_key_size, "encoded verifying key")
        return _split(enc, (B32_SIZE, self.t1_size))

    # Signature

    def split_hint(self, y: bytes) -> tuple[bytes, bytes]:
        """Split an encoded hint into its index bytes and its per-row cut bytes."""
        y = _check_bytes(y, self.hint_size, "encoded hint")
        return _split(y, (self.omega, self.k))

    def encode_w1(self, w1: Vector) -> bytes:
        _check_vector(w1, self.k, "w1")
        return encode(w1, self.w1_bits)

    def decode_w1(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.w1_size, "encoded w1")
        return decode_vector(enc, self.w1_bits, self.k, BASE_FIELD)

    def encode_z(self, z: Vector) -> bytes:
        _check_vector(z, self.l, "z")
        return bit_pack_vector(z, self.gamma1 - 1, self.gamma1)

    def decode_z(self, enc: bytes) -> Vector:
        enc = _check_bytes(enc, self.z_size, "encoded z")
        return bit_unpack_vector(enc, self.gamma1 - 1, self.gamma1, self.l)

    def concat_sig(self, c_tilde: bytes, z: bytes, h: bytes) -> bytes:
        return b"".join(
            (
                _check_bytes(c_tilde, self.lambda_size, "c_tilde"),
                _check_bytes(z, self.z_size, "encoded z"),
                _check_bytes(h, self.hint_size, "encoded hint"),
            )
        )

    def split_sig(self, enc: bytes) -> tuple[bytes, bytes, bytes]:
        """Split an encoded signature into (c_tilde, z, hint)."""
        enc = _check_bytes(enc, self.signature_size, "encoded signature")
        return _split(enc, (self.lambda_size, self.z_size, self.hint_size))