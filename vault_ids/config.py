"""
vault_ids.config — output, logging and address-checking settings.

This module has NO third-party deps and is safe to import very early.

Configuration precedence:
  1) Explicit CLI flags (handled in vault_ids.cli.main)
  2) Environment variables (VAULT_IDS_*)
  3) Hardcoded defaults below

Env vars (case-insensitive where boolean/enum):
  - VAULT_IDS_LOG_LEVEL          (str)    default: WARNING
  - VAULT_IDS_LOG_FORMAT         (enum)   default: text     (text | json)
  - VAULT_IDS_OUTPUT             (enum)   default: text     (text | json)
  - VAULT_IDS_STRICT_CHECKSUM    (bool)   default: true
  - VAULT_IDS_CHECKSUM_OUTPUT    (bool)   default: true

Unrecognised values fall back to the default.

Usage:
    from vault_ids.config import load_config
    CFG = load_config()
    if CFG.strict_checksum: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Tuple

ENV_PREFIX = "VAULT_IDS_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_FORMATS = ("text", "json")


# ----------------------------- helpers ---------------------------------------


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    val = raw.strip().lower()
    if val in ("1", "true", "t", "yes", "y", "on"):
        return True
    if val in ("0", "false", "f", "no", "n", "off"):
        return False
    return default


def _env_choice(name: str, default: str, choices: Tuple[str, ...], *, upper: bool = False) -> str:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    val = raw.strip().upper() if upper else raw.strip().lower()
    return val if val in choices else default


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class IdsConfig:
    log_level: str
    log_format: str
    output_format: str
    strict_checksum: bool
    checksum_output: bool

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    @property
    def json_output(self) -> bool:
        return self.output_format == "json"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "output_format": self.output_format,
            "strict_checksum": self.strict_checksum,
            "checksum_output": self.checksum_output,
        }


@lru_cache(maxsize=1)
def load_config() -> IdsConfig:
    """
    Build and cache an IdsConfig from environment + defaults.
    Call `load_config.cache_clear()` after changing the environment.
    """
    return IdsConfig(
        log_level=_env_choice("LOG_LEVEL", "WARNING", _LOG_LEVELS, upper=True),
        log_format=_env_choice("LOG_FORMAT", "text", _FORMATS),
        output_format=_env_choice("OUTPUT", "text", _FORMATS),
        strict_checksum=_env_bool("STRICT_CHECKSUM", True),
        checksum_output=_env_bool("CHECKSUM_OUTPUT", True),
    )


__all__ = ["ENV_PREFIX", "IdsConfig", "load_config"]
