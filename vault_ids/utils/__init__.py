"""
Utility helpers for vault_ids.

Re-exports:
- bytes: hex helpers and 32-byte word padding
- hash: Keccak-256 digest
"""

from .bytes import (ceil32, ensure_bytes, from_hex, pad_left, pad_right,
                    to_hex, uint_to_word)
from .hash import keccak256, keccak256_hex

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "ensure_bytes",
    "ceil32",
    "pad_left",
    "pad_right",
    "uint_to_word",
    # hash
    "keccak256",
    "keccak256_hex",
]
