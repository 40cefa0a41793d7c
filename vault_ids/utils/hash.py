"""
vault_ids.utils.hash
====================

Keccak-256 as used by Ethereum (original Keccak padding, *not* NIST SHA3-256).
Every identifier in this package is a digest produced here; any other
construction would silently yield identifiers nobody on-chain recognises.

Provided APIs
-------------
- keccak256(data) -> bytes              (32 bytes)
- keccak256_hex(data, *, prefix=True)   (0x-prefixed lowercase by default)
- Keccak256()                           streaming hasher with update()/digest()

Backed by PyCryptodome (`pip install pycryptodome`).
"""

from __future__ import annotations

from Crypto.Hash import keccak as _keccak

from .bytes import BytesLike, ensure_bytes, to_hex

DIGEST_SIZE = 32


def _new_keccak256():
    return _keccak.new(digest_bits=256)


def keccak256(data: BytesLike) -> bytes:
    """Return the Keccak-256 digest of *data*."""
    h = _new_keccak256()
    h.update(ensure_bytes(data))
    return h.digest()


def keccak256_hex(data: BytesLike, *, prefix: bool = True) -> str:
    """Return hex string of Keccak-256 digest (0x-prefixed by default)."""
    return to_hex(keccak256(data), prefix=prefix)


class Keccak256:
    """Streaming Keccak-256 hasher with update()/digest()/hexdigest()."""

    __slots__ = ("_h",)

    def __init__(self) -> None:
        self._h = _new_keccak256()

    def update(self, data: BytesLike) -> "Keccak256":
        self._h.update(ensure_bytes(data))
        return self

    def digest(self) -> bytes:
        return self._h.digest()

    def hexdigest(self, *, prefix: bool = True) -> str:
        return to_hex(self._h.digest(), prefix=prefix)


__all__ = ["DIGEST_SIZE", "keccak256", "keccak256_hex", "Keccak256"]
