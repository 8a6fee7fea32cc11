"""Byte-string helpers that avoid data-dependent branches."""

from __future__ import annotations


def leading_zeros(n: bytes) -> int:
    """Number of leading zero bits in the first byte of ``n``."""
    if not n:
        raise ValueError("cannot count leading zeros of an empty byte string")
    return 8 - n[0].bit_length()


def rshift(n: bytes, shift: int) -> bytes:
    """Shift a big-endian byte string right by ``shift`` bits (0 <= shift < 8)."""
    if not 0 <= shift < 8:
        raise ValueError(f"shift must lie in [0, 8), got {shift}")
    mask = (1 << shift) - 1
    carry = 0
    out = bytearray()
    for byte in bytes(n):
        new_carry = ((byte & mask) << (8 - shift)) & 0xFF
        out.append((byte >> shift) | carry)
        carry = new_carry
    return bytes(out)


def is_zero(n: bytes) -> bool:
    """Whether every byte of ``n`` is zero."""
    acc = 0
    for byte in bytes(n):
        acc |= byte
    return acc == 0


def lt(a: bytes, b: bytes) -> bool:
    """Whether big-endian ``a`` is less than big-endian ``b`` of the same length."""
    a = bytes(a)
    b = bytes(b)
    if len(a) != len(b):
        raise ValueError(f"operands must have the same length, got {len(a)} and {len(b)}")
    borrow = 0
    for x, y in zip(reversed(a), reversed(b)):
        c = (y + (borrow >> 7)) & 0xFFFF
        borrow = ((x - c) & 0xFFFF) >> 8
    return borrow != 0