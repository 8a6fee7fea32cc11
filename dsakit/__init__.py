"""ML-DSA lattice arithmetic, encoding, hints and sampling, plus RFC 6979 nonce generation."""

__version__ = "0.1.0"

__all__ = [
    "algebra",
    "arrays",
    "bitpack",
    "constant_time",
    "field",
    "hint",
    "ntt",
    "packing",
    "params",
    "rfc6979",
    "sampling",
    "xof",
]