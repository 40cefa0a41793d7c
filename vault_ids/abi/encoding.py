"""
Canonical ABI encoding (Solidity `abi.encode` layout).

Layout
------
Every value occupies one or more 32-byte words.

- address:            12 zero bytes || 20 address bytes (right-aligned)
- bool:               uint256 0 or 1
- uintN:              32-byte big-endian
- intN:               32-byte big-endian two's complement
- bytesN:             N bytes, right-padded with zeros to 32
- bytes / string:     uint256 length || content right-padded to a 32 multiple
- static tuple:       its components' heads, inline, in order

Sequences (argument lists and tuples) use two passes:

    head(v1) || ... || head(vN) || tail(v1) || ... || tail(vN)

A static value's head is its encoding and its tail is empty. A dynamic value's
head is a uint256 offset, counted from the first byte of the enclosing
sequence, at which its tail (its full encoding) starts. Offsets therefore
include the whole head section plus every earlier tail, so any number of
dynamic values may appear in any position.

All values are validated and normalized before the first byte is written;
a bad value raises ValidationError and no partial encoding is produced.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Union

from ..errors import AbiTypeError, ValidationError
from ..utils.bytes import int_to_word, pad_left, pad_right, uint_to_word
from .types import (AbiType, AddressType, BoolType, BytesType, FixedBytesType,
                    IntType, StringType, TupleType, UIntType, parse_type,
                    parse_types)

__all__ = [
    "encode",
    "encode_single",
    "encode_normalized",
]

TypeSpec = Union[str, AbiType]


# ──────────────────────────────────────────────────────────────────────────────
# Value encoders (inputs already normalized by AbiType.validate)
# ──────────────────────────────────────────────────────────────────────────────


def _encode_dynamic_bytes(b: bytes) -> bytes:
    return uint_to_word(len(b)) + pad_right(b)


def _encode_value(typ: AbiType, value: Any) -> bytes:
    if isinstance(typ, AddressType):
        return pad_left(value)
    if isinstance(typ, BoolType):
        return uint_to_word(1 if value else 0)
    if isinstance(typ, UIntType):
        return uint_to_word(value)
    if isinstance(typ, IntType):
        return int_to_word(value)
    if isinstance(typ, FixedBytesType):
        return pad_right(value)
    if isinstance(typ, (BytesType, StringType)):
        return _encode_dynamic_bytes(value)
    if isinstance(typ, TupleType):
        return _encode_sequence(typ.components, value)
    raise AbiTypeError(f"unsupported ABI type: {typ!r}")


def _encode_sequence(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    heads: List[bytes] = []
    tails: List[bytes] = []
    offset = sum(t.head_size for t in types)
    for typ, value in zip(types, values):
        if typ.is_dynamic:
            tail = _encode_value(typ, value)
            heads.append(uint_to_word(offset))
            tails.append(tail)
            offset += len(tail)
        else:
            heads.append(_encode_value(typ, value))
    return b"".join(heads) + b"".join(tails)


# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────


def encode_normalized(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    """
    Encode values that already went through `AbiType.validate`.
    Never fails for values inside each type's domain.
    """
    return _encode_sequence(types, values)


def encode(types: Union[str, Sequence[TypeSpec]], values: Sequence[Any]) -> bytes:
    """
    `abi.encode(values...)` for the given parameter types.

    `types` may be a comma-separated string ("string, address") or a sequence
    of specs/type objects.

    Raises:
        AbiTypeError for malformed type specs; ValidationError when the
        values do not match the types (count, range, format).
    """
    parsed = parse_types(types)
    if isinstance(values, (str, bytes, bytearray)) or len(values) != len(parsed):
        raise ValidationError(
            f"expected {len(parsed)} values for ({','.join(t.name for t in parsed)})",
            types=",".join(t.name for t in parsed),
        )
    normalized = TupleType(parsed).validate(values)
    return encode_normalized(parsed, normalized)


def encode_single(typ: TypeSpec, value: Any) -> bytes:
    """Encode one value as a single-element argument list."""
    return encode([parse_type(typ)], [value])
