"""Deterministic generation of the ephemeral scalar k with HMAC_DRBG."""

from __future__ import annotations

import hmac
from typing import Any

from dsakit.constant_time import is_zero, leading_zeros, lt, rshift


class HmacDrbg:
    """HMAC-based deterministic random bit generator (NIST SP 800-90A).

    ``digest`` is anything :func:`hmac.new` accepts as ``digestmod``.
    """

    def __init__(
        self,
        entropy_input: bytes,
        nonce: bytes,
        personalization_string: bytes = b"",
        digest: Any = "sha256",
    ) -> None:
        self._digest = digest
        size = hmac.new(b"", digestmod=digest).digest_size
        seed = bytes(entropy_input) + bytes(nonce) + bytes(personalization_string)
        key = bytes(size)
        v = b"\x01" * size
        for i in (0, 1):
            key = self._mac(key, v + bytes([i]) + seed)
            v = self._mac(key, v)
        self._key = key
        self._v = v

    def _mac(self, key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, self._digest).digest()

    def fill_bytes(self, n: int) -> bytes:
        """Produce the next ``n`` output bytes and advance the state."""
        if n < 0:
            raise ValueError(f"cannot produce a negative number of bytes: {n}")
        out = bytearray()
        while len(out) < n:
            self._v = self._mac(self._key, self._v)
            out += self._v[: n - len(out)]
        self._key = self._mac(self._key, self._v + b"\x00")
        self._v = self._mac(self._key, self._v)
        return bytes(out)


def generate_k(
    x: bytes, q: bytes, h: bytes, data: bytes = b"", digest: Any = "sha256"
) -> bytes:
    """Deterministically derive the ephemeral scalar k.

    ``x`` is the secret scalar, ``q`` the group order, ``h`` the message digest
    already reduced modulo ``q`` and ``data`` optional additional input; all but
    ``data`` are big-endian byte strings of the same length.
    """
    x, q, h = bytes(x), bytes(q), bytes(h)
    if not (len(x) == len(q) == len(h)):
        raise ValueError(
            f"x, q and h must have the same length, got {len(x)}, {len(q)} and {len(h)}"
        )
    if not lt(h, q):
        raise ValueError("h must be reduced modulo q")

    shift = leading_zeros(q)
    drbg = HmacDrbg(x, h, bytes(data), digest)
    while True:
        k = drbg.fill_bytes(len(q))
        if shift:
            k = rshift(k, shift)
        if not is_zero(k) and lt(k, q):
            return k