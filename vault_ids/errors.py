"""
vault_ids.errors
----------------

A small, consistent error system for the encoder, the identifier schemes and
the CLI.

Design goals
------------
- One root `VaultIdsError` with a machine-friendly `code` and optional `data`.
- Concrete subclasses for the few failure domains we have (bad input, bad ABI
  type spec, bad payload, bad CLI usage).
- Safe JSON representation (`to_dict`) for `--json` output and log records.

Every error here is deterministic: the same input fails the same way, so
nothing is ever marked retryable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping

__all__ = [
    "ErrorCode",
    "VaultIdsError",
    "ValidationError",
    "AbiTypeError",
    "DecodeError",
    "UsageError",
]


class ErrorCode(str, Enum):
    MALFORMED_INPUT = "VAULT_IDS/MALFORMED_INPUT"
    ABI_TYPE = "VAULT_IDS/ABI_TYPE"
    DECODE = "VAULT_IDS/DECODE"
    USAGE = "VAULT_IDS/USAGE"


@dataclass(eq=False)
class VaultIdsError(Exception):
    """
    Root error for vault_ids.

    Attributes
    ----------
    code: str
        Machine-stable error code (see ErrorCode).
    message: str
        Human hint suitable for stderr and logs.
    data: dict
        Optional machine data (the offending field, its value, limits).
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe shape for CLI output and structured logs."""
        code = self.code.value if isinstance(self.code, ErrorCode) else str(self.code)
        return {
            "code": code,
            "message": self.message,
            "data": _jsonmap(self.data),
        }

    def __str__(self) -> str:
        return self.message


class ValidationError(VaultIdsError, ValueError):
    """Input text or a Python value does not fit its declared type."""

    def __init__(self, message: str = "malformed input", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_INPUT, message=message, data=_jsonmap(data)
        )


class AbiTypeError(VaultIdsError, TypeError):
    """An ABI type spec is malformed or unsupported."""

    def __init__(self, message: str = "unsupported ABI type", **data: Any) -> None:
        super().__init__(code=ErrorCode.ABI_TYPE, message=message, data=_jsonmap(data))


class DecodeError(VaultIdsError, ValueError):
    def __init__(self, message: str = "malformed ABI payload", **data: Any) -> None:
        super().__init__(code=ErrorCode.DECODE, message=message, data=_jsonmap(data))


class UsageError(VaultIdsError):
    """Wrong argument count or unknown CLI command."""

    def __init__(self, message: str = "invalid usage", **data: Any) -> None:
        super().__init__(code=ErrorCode.USAGE, message=message, data=_jsonmap(data))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; stringify the rest; hex-encode bytes.
    if v is None or isinstance(v, (bool, str, list, dict)):
        return v
    if isinstance(v, int):
        # uint256 values overflow JSON number precision in most consumers
        return v if abs(v) < 2**53 else str(v)
    if isinstance(v, (bytes, bytearray)):
        return "0x" + bytes(v).hex()
    return str(v)
