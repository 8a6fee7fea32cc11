"""Integer truncation and splitting or joining of equally sized sequences."""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Sequence


def truncate(x: int, bits: int) -> int:
    """Keep the low ``bits`` bits of a non-negative integer."""
    if bits < 0:
        raise ValueError(f"bit width must not be negative, got {bits}")
    return x & ((1 << bits) - 1)


def flatten(parts: Iterable[Sequence]) -> bytes | list:
    """Join equally sized parts into one sequence.

    Byte strings are joined into ``bytes``; any other parts into a list.
    """
    parts = list(parts)
    if not parts:
        return []
    size = len(parts[0])
    if any(len(part) != size for part in parts):
        raise ValueError("all parts must have the same length")
    if all(isinstance(part, (bytes, bytearray, memoryview)) for part in parts):
        return b"".join(parts)
    return list(chain.from_iterable(parts))


def unflatten(seq: Sequence, count: int) -> list:
    """Split ``seq`` into ``count`` equally sized slices."""
    if count <= 0:
        raise ValueError(f"part count must be positive, got {count}")
    size, remainder = divmod(len(seq), count)
    if remainder:
        raise ValueError(f"length {len(seq)} is not a multiple of {count}")
    return [seq[start : start + size] for start in range(0, len(seq), size)] if size else [
        seq[0:0] for _ in range(count)
    ]