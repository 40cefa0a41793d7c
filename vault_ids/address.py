"""
vault_ids.address — 20-byte account addresses in `0x` hex form.

Rules
-----
- Text form is `0x` followed by exactly 40 hex characters.
- All-lowercase hex carries no checksum and is accepted as is.
- Any uppercase letter makes the text an EIP-55 checksum, which must match
  (so all-uppercase hex is rejected unless it happens to be its own
  checksum), unless strict checksum checking is disabled
  (VAULT_IDS_STRICT_CHECKSUM=false).

EIP-55: take Keccak-256 of the lowercase hex (ASCII, no prefix); a letter at
position i is uppercased when nibble i of that digest is >= 8.
"""

from __future__ import annotations

import re
from typing import NewType, Optional, Union

from .config import load_config
from .errors import ValidationError
from .utils.hash import keccak256

__all__ = [
    "ADDRESS_LENGTH",
    "Address",
    "ZERO_ADDRESS",
    "parse_address",
    "address_bytes",
    "is_address",
    "is_checksum_address",
    "to_checksum_address",
]

ADDRESS_LENGTH = 20

Address = NewType("Address", str)

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")

ZERO_ADDRESS = Address("0x" + "00" * ADDRESS_LENGTH)


def to_checksum_address(value: Union[str, bytes, bytearray]) -> Address:
    """Format a 20-byte address (raw bytes or any-case hex text) per EIP-55."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_LENGTH:
            raise ValidationError(
                f"address must be {ADDRESS_LENGTH} bytes, got {len(value)}",
                value=bytes(value),
            )
        lower = bytes(value).hex()
    else:
        if not _ADDRESS_RE.fullmatch(value):
            raise ValidationError(
                f"invalid address {value!r}: expected 0x followed by 40 hex characters",
                value=value,
            )
        lower = value[2:].lower()

    digest = keccak256(lower.encode("ascii")).hex()
    out = "".join(
        ch.upper() if ch.isalpha() and int(digest[i], 16) >= 8 else ch
        for i, ch in enumerate(lower)
    )
    return Address("0x" + out)


def is_checksum_address(text: str) -> bool:
    return isinstance(text, str) and bool(_ADDRESS_RE.fullmatch(text)) and (
        to_checksum_address(text) == text
    )


def parse_address(text: str, *, strict_checksum: Optional[bool] = None) -> Address:
    """
    Validate an address string and return its checksummed form.

    Raises ValidationError for anything that is not `0x` + 40 hex characters,
    and for input with uppercase letters whose EIP-55 checksum does not match.
    """
    if not isinstance(text, str):
        raise ValidationError("address must be a 0x-prefixed hex string", value=text)
    if not _ADDRESS_RE.fullmatch(text):
        raise ValidationError(
            f"invalid address {text!r}: expected 0x followed by 40 hex characters",
            value=text,
        )
    if strict_checksum is None:
        strict_checksum = load_config().strict_checksum

    body = text[2:]
    checksummed = to_checksum_address(text)
    if strict_checksum and body != body.lower() and checksummed != text:
        raise ValidationError(
            f"invalid address {text!r}: EIP-55 checksum mismatch (expected {checksummed})",
            value=text,
            expected=checksummed,
        )
    return checksummed


def address_bytes(value: Union[str, bytes, bytearray], *, strict_checksum: Optional[bool] = None) -> bytes:
    """Address text (validated) or raw 20 bytes -> raw 20 bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_LENGTH:
            raise ValidationError(
                f"address must be {ADDRESS_LENGTH} bytes, got {len(value)}",
                value=bytes(value),
            )
        return bytes(value)
    return bytes.fromhex(parse_address(value, strict_checksum=strict_checksum)[2:])


def is_address(text: str, *, strict_checksum: Optional[bool] = None) -> bool:
    try:
        parse_address(text, strict_checksum=strict_checksum)
    except ValidationError:
        return False
    return True
