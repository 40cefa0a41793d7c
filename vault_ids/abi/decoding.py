"""
Inverse decoder for the canonical ABI layout (see encoding.py).

Conventions mirrored from the encoder:
- address:      12 zero bytes || 20 bytes  -> EIP-55 checksummed str
- bool:         word 0 or 1                -> bool
- uintN/intN:   32-byte big-endian word    -> int (range-checked)
- bytesN:       left-aligned, zero-padded  -> bytes
- bytes/string: offset -> length word || padded content -> bytes / str
- tuples:       nested head/tail sequence  -> tuple

Top-level:
- decode(types, data, strict=True) -> tuple

`strict=True` rejects non-zero padding and, for all-static type lists,
payloads whose length is not exactly the head size.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple, Union

from ..address import ADDRESS_LENGTH, to_checksum_address
from ..errors import AbiTypeError, DecodeError, ValidationError
from ..utils.bytes import WORD, ceil32, ensure_bytes, word_to_uint
from .types import (AbiType, AddressType, BoolType, BytesType, FixedBytesType,
                    IntType, StringType, TupleType, UIntType, parse_types)

__all__ = ["decode"]

_ADDRESS_PAD = WORD - ADDRESS_LENGTH


def _read_word(buf: bytes, offset: int) -> bytes:
    end = offset + WORD
    if offset < 0 or end > len(buf):
        raise DecodeError("truncated payload", offset=offset, size=len(buf))
    return buf[offset:end]


def _decode_value(typ: AbiType, buf: bytes, offset: int, strict: bool) -> Any:
    if isinstance(typ, TupleType):
        return _decode_sequence(typ.components, buf, offset, strict)

    word = _read_word(buf, offset)

    if isinstance(typ, AddressType):
        if strict and any(word[:_ADDRESS_PAD]):
            raise DecodeError("non-zero address padding", offset=offset)
        return to_checksum_address(word[_ADDRESS_PAD:])

    if isinstance(typ, BoolType):
        v = word_to_uint(word)
        if v not in (0, 1):
            raise DecodeError("invalid boolean word", offset=offset)
        return bool(v)

    if isinstance(typ, UIntType):
        v = word_to_uint(word)
        if v.bit_length() > typ.bits:
            raise DecodeError(f"{typ.name} overflow", offset=offset)
        return v

    if isinstance(typ, IntType):
        v = int.from_bytes(word, "big", signed=True)
        if not -(1 << (typ.bits - 1)) <= v < (1 << (typ.bits - 1)):
            raise DecodeError(f"{typ.name} overflow", offset=offset)
        return v

    if isinstance(typ, FixedBytesType):
        if strict and any(word[typ.size:]):
            raise DecodeError(f"non-zero {typ.name} padding", offset=offset)
        return word[: typ.size]

    if isinstance(typ, (BytesType, StringType)):
        length = word_to_uint(word)
        start = offset + WORD
        if start + ceil32(length) > len(buf):
            raise DecodeError("truncated dynamic data", offset=offset, length=length)
        content = buf[start : start + length]
        if strict and any(buf[start + length : start + ceil32(length)]):
            raise DecodeError("non-zero dynamic padding", offset=offset)
        if isinstance(typ, StringType):
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError("string is not valid UTF-8", offset=offset) from e
        return content

    raise AbiTypeError(f"unsupported ABI type: {typ!r}")


def _decode_sequence(
    types: Sequence[AbiType], buf: bytes, base: int, strict: bool
) -> Tuple[Any, ...]:
    out: List[Any] = []
    pos = base
    for typ in types:
        if typ.is_dynamic:
            rel = word_to_uint(_read_word(buf, pos))
            if base + rel >= len(buf):
                raise DecodeError("offset points past end of payload", offset=pos)
            out.append(_decode_value(typ, buf, base + rel, strict))
            pos += WORD
        else:
            out.append(_decode_value(typ, buf, pos, strict))
            pos += typ.head_size
    return tuple(out)


def decode(
    types: Union[str, Sequence[Union[str, AbiType]]],
    data: Union[bytes, bytearray, memoryview, str],
    *,
    strict: bool = True,
) -> Tuple[Any, ...]:
    """
    Decode an `abi.encode` payload into a tuple of Python values.

    Raises:
        DecodeError for truncated or non-canonical payloads.
    """
    parsed = parse_types(types)
    try:
        buf = ensure_bytes(data)
    except ValidationError as e:
        raise DecodeError(f"payload is not valid hex: {e.message}") from e
    if strict and not any(t.is_dynamic for t in parsed):
        expected = sum(t.head_size for t in parsed)
        if len(buf) != expected:
            raise DecodeError(
                f"expected {expected} bytes, got {len(buf)}",
                expected=expected,
                size=len(buf),
            )
    return _decode_sequence(parsed, buf, 0, strict)
