from __future__ import annotations

from typing import Union

from ..errors import ValidationError

BytesLike = Union[bytes, bytearray, memoryview]

WORD = 32


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      ValidationError on invalid hex strings.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    """
    Bytes -> hex string (lowercase). Prefix with '0x' by default.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even-length (nibbles must pair to bytes) and is case agnostic.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 != 0:
        raise ValidationError("hex string must have even length", value=s)
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValidationError(f"invalid hex string: {e}", value=s) from e


# --- 32-byte word helpers -----------------------------------------------------


def ceil32(n: int) -> int:
    """Round `n` up to the next multiple of 32 (0 stays 0)."""
    return n if n % WORD == 0 else n + WORD - (n % WORD)


def pad_left(b: BytesLike, size: int = WORD) -> bytes:
    """Left-pad with zero bytes to `size` (right-aligns the value)."""
    raw = bytes(b)
    if len(raw) > size:
        raise ValueError(f"value of {len(raw)} bytes does not fit in {size}")
    return b"\x00" * (size - len(raw)) + raw


def pad_right(b: BytesLike) -> bytes:
    """Right-pad with zero bytes to the next 32-byte boundary."""
    raw = bytes(b)
    return raw + b"\x00" * (ceil32(len(raw)) - len(raw))


def uint_to_word(n: int) -> bytes:
    """Non-negative int -> 32-byte big-endian word."""
    return n.to_bytes(WORD, "big", signed=False)


def int_to_word(n: int) -> bytes:
    """Signed int -> 32-byte big-endian two's complement word."""
    return n.to_bytes(WORD, "big", signed=True)


def word_to_uint(w: bytes) -> int:
    return int.from_bytes(w, "big", signed=False)


__all__ = [
    "BytesLike",
    "WORD",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "ceil32",
    "pad_left",
    "pad_right",
    "uint_to_word",
    "int_to_word",
    "word_to_uint",
]
