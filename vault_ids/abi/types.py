"""
ABI type definitions and validation for Solidity-compatible `abi.encode`.

Supported type specs:
  - address                    20-byte account, static
  - bool                       static
  - uintN / intN               N in 8..256 step 8; bare uint/int mean 256
  - bytesN                     N in 1..32, static, left-aligned
  - bytes, string              dynamic
  - (T1,T2,...) / tuple(...)   static iff every component is static

Type objects only coerce/validate Python values into the normalized form the
encoder consumes (addresses -> 20 raw bytes, strings -> UTF-8 bytes). The
on-wire layout lives in vault_ids.abi.encoding/decoding.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

from ..address import address_bytes
from ..errors import AbiTypeError, ValidationError
from ..utils.bytes import from_hex

__all__ = [
    "AbiType",
    "AddressType",
    "BoolType",
    "UIntType",
    "IntType",
    "FixedBytesType",
    "BytesType",
    "StringType",
    "TupleType",
    "parse_type",
    "parse_types",
    "coerce_uint",
    "coerce_int",
    "parse_uint",
    "UINT256_MAX",
]

UINT256_MAX = (1 << 256) - 1

_DECIMAL_RE = re.compile(r"[0-9]+")


# ──────────────────────────────────────────────────────────────────────────────
# Scalar coercion helpers
# ──────────────────────────────────────────────────────────────────────────────


def coerce_int(value: Any, *, bits: int = 256, signed: bool = True) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{'int' if signed else 'uint'}{bits} must be a Python int, got {type(value).__name__}",
            value=repr(value),
        )
    min_v = -(1 << (bits - 1)) if signed else 0
    max_v = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
    if value < min_v or value > max_v:
        kind = "int" if signed else "uint"
        raise ValidationError(
            f"{kind}{bits} out of range [{min_v}, {max_v}]", value=value
        )
    return int(value)


def coerce_uint(value: Any, *, bits: int = 256) -> int:
    return coerce_int(value, bits=bits, signed=False)


def parse_uint(text: str, *, bits: int = 256, field: str = "value") -> int:
    """
    Parse a base-10 digit string into an unsigned int of at most `bits` bits.

    No sign, no whitespace, no hex, no underscores. Leading zeros are allowed.
    The digit count is checked before any conversion, so oversized input is
    rejected as a ValidationError and never reaches int() or the encoder.
    """
    shown = _preview(text)
    if not isinstance(text, str) or not _DECIMAL_RE.fullmatch(text):
        raise ValidationError(
            f"invalid {field} {shown}: expected a non-negative base-10 integer",
            field=field,
            value=shown,
        )
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str((1 << bits) - 1)) or int(digits, 10).bit_length() > bits:
        raise ValidationError(
            f"invalid {field} {shown}: exceeds 2**{bits} - 1",
            field=field,
            value=shown,
        )
    return int(digits, 10)


def _preview(text: Any, limit: int = 100) -> str:
    if not isinstance(text, str):
        return f"<{type(text).__name__}>"
    r = repr(text)
    return r if len(r) <= limit else f"{r[:limit]}... ({len(text)} chars)"


# ──────────────────────────────────────────────────────────────────────────────
# Type specs
# ──────────────────────────────────────────────────────────────────────────────


class AbiType:
    """Common surface: name, is_dynamic, head_size, validate()."""

    @property
    def name(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    @property
    def is_dynamic(self) -> bool:
        return False

    @property
    def head_size(self) -> int:
        """Bytes this type occupies inline in the enclosing head."""
        return 32

    def validate(self, value: Any) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class AddressType(AbiType):
    @property
    def name(self) -> str:
        return "address"

    def validate(self, value: Any) -> bytes:
        if not isinstance(value, (str, bytes, bytearray)):
            raise ValidationError(
                "address must be a 0x-hex string or 20 raw bytes", value=repr(value)
            )
        return address_bytes(value)


@dataclass(frozen=True)
class BoolType(AbiType):
    @property
    def name(self) -> str:
        return "bool"

    def validate(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        raise ValidationError("bool must be True/False", value=repr(value))


@dataclass(frozen=True)
class UIntType(AbiType):
    bits: int = 256

    @property
    def name(self) -> str:
        return f"uint{self.bits}"

    def validate(self, value: Any) -> int:
        return coerce_uint(value, bits=self.bits)


@dataclass(frozen=True)
class IntType(AbiType):
    bits: int = 256

    @property
    def name(self) -> str:
        return f"int{self.bits}"

    def validate(self, value: Any) -> int:
        return coerce_int(value, bits=self.bits, signed=True)


@dataclass(frozen=True)
class FixedBytesType(AbiType):
    size: int

    def __post_init__(self) -> None:
        if not 1 <= self.size <= 32:
            raise AbiTypeError("bytesN length must be in 1..32", size=self.size)

    @property
    def name(self) -> str:
        return f"bytes{self.size}"

    def validate(self, value: Any) -> bytes:
        b = _coerce_bytes(value)
        if len(b) != self.size:
            raise ValidationError(
                f"{self.name} needs exactly {self.size} bytes, got {len(b)}", value=b
            )
        return b


@dataclass(frozen=True)
class BytesType(AbiType):
    @property
    def name(self) -> str:
        return "bytes"

    @property
    def is_dynamic(self) -> bool:
        return True

    def validate(self, value: Any) -> bytes:
        return _coerce_bytes(value)


@dataclass(frozen=True)
class StringType(AbiType):
    @property
    def name(self) -> str:
        return "string"

    @property
    def is_dynamic(self) -> bool:
        return True

    def validate(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise ValidationError("string must be a Python str", value=repr(value))
        return value.encode("utf-8")


@dataclass(frozen=True)
class TupleType(AbiType):
    components: Tuple[AbiType, ...]

    @property
    def name(self) -> str:
        return "(" + ",".join(c.name for c in self.components) + ")"

    @property
    def is_dynamic(self) -> bool:
        return any(c.is_dynamic for c in self.components)

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return 32
        return sum(c.head_size for c in self.components)

    def validate(self, value: Any) -> Tuple[Any, ...]:
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise ValidationError(
                f"{self.name} expects a sequence of {len(self.components)} values",
                value=repr(value),
            )
        if len(value) != len(self.components):
            raise ValidationError(
                f"{self.name} expects {len(self.components)} values, got {len(value)}"
            )
        return tuple(c.validate(v) for c, v in zip(self.components, value))


def _coerce_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return from_hex(value)
    raise ValidationError(
        "bytes must be bytes, bytearray, or 0x-hex string", value=repr(value)
    )


# ──────────────────────────────────────────────────────────────────────────────
# Parser for textual type specs
# ──────────────────────────────────────────────────────────────────────────────


def _split_top_level_commas(s: str) -> List[str]:
    """Split on commas but ignore commas inside nested tuples."""
    out: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in s:
        if ch == "(":
            depth += 1
            buf.append(ch)
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise AbiTypeError("Unbalanced parentheses in tuple type", spec=s)
            buf.append(ch)
        elif ch == "," and depth == 0:
            out.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise AbiTypeError("Unbalanced parentheses in tuple type", spec=s)
    out.append("".join(buf).strip())
    return out


def _int_bits(spec: str, digits: str) -> int:
    if digits == "":
        return 256
    if not digits.isdigit():
        raise AbiTypeError(f"invalid integer type {spec!r}", spec=spec)
    bits = int(digits)
    if bits % 8 != 0 or not 8 <= bits <= 256:
        raise AbiTypeError("bit width must be a multiple of 8 in 8..256", spec=spec)
    return bits


def parse_type(spec: Union[str, AbiType]) -> AbiType:
    """Parse a textual type spec (e.g. "uint256", "(address,uint256)") into a type object."""
    if isinstance(spec, AbiType):
        return spec
    if not isinstance(spec, str) or not spec.strip():
        raise AbiTypeError("type spec must be a non-empty string", spec=repr(spec))

    s = re.sub(r"\s+", "", spec)
    if s.startswith("tuple("):
        s = s[len("tuple"):]

    if s.startswith("(") and s.endswith(")"):
        inner = s[1:-1]
        if not inner:
            raise AbiTypeError("empty tuple type", spec=spec)
        return TupleType(tuple(parse_type(p) for p in _split_top_level_commas(inner)))
    if s.endswith("]"):
        raise AbiTypeError(f"array types are not supported: {spec!r}", spec=spec)

    if s == "address":
        return AddressType()
    if s == "bool":
        return BoolType()
    if s == "string":
        return StringType()
    if s == "bytes":
        return BytesType()
    if s.startswith("uint"):
        return UIntType(_int_bits(spec, s[4:]))
    if s.startswith("int"):
        return IntType(_int_bits(spec, s[3:]))
    if s.startswith("bytes"):
        digits = s[5:]
        if not digits.isdigit():
            raise AbiTypeError(f"invalid bytesN type {spec!r}", spec=spec)
        return FixedBytesType(int(digits))

    raise AbiTypeError(f"unsupported type spec: {spec!r}", spec=spec)


def parse_types(specs: Union[str, Sequence[Union[str, AbiType]]]) -> Tuple[AbiType, ...]:
    """
    Parse a parameter list, either a comma-separated string such as
    "string, address, (address,address,address,address,uint256)" or a
    sequence of individual specs.
    """
    if isinstance(specs, str):
        if not specs.strip():
            return tuple()
        specs = _split_top_level_commas(re.sub(r"\s+", "", specs))
    return tuple(parse_type(s) for s in specs)
