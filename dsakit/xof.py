"""SHAKE sponges that are absorbed into first and then squeezed incrementally."""

from __future__ import annotations

import hashlib
from typing import Callable

_MIN_BLOCK = 168


class ShakeState:
    """An extendable-output function with separate absorbing and squeezing phases."""

    def __init__(self, factory: Callable[[], "hashlib._Hash"]) -> None:
        self._sponge = factory()
        self._stream = b""
        self._offset = 0
        self._squeezing = False

    @property
    def squeezing(self) -> bool:
        """Whether output has already been read."""
        return self._squeezing

    def absorb(self, data: bytes) -> ShakeState:
        """Feed ``data`` into the sponge; returns the state for chaining."""
        if self._squeezing:
            raise RuntimeError("cannot absorb after squeezing has begun")
        self._sponge.update(bytes(data))
        return self

    def squeeze(self, n: int) -> bytes:
        """Read the next ``n`` bytes of output."""
        if n < 0:
            raise ValueError(f"cannot squeeze a negative number of bytes: {n}")
        self._squeezing = True
        end = self._offset + n
        if end > len(self._stream):
            length = max(end, 2 * len(self._stream), _MIN_BLOCK)
            self._stream = self._sponge.digest(length)
        out = self._stream[self._offset : end]
        self._offset = end
        return out


def shake128_state() -> ShakeState:
    """A fresh SHAKE128 state (G)."""
    return ShakeState(hashlib.shake_128)


def shake256_state() -> ShakeState:
    """A fresh SHAKE256 state (H)."""
    return ShakeState(hashlib.shake_256)