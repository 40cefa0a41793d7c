"""
vault_ids.logging
-----------------

Structured logging with:
- JSON or concise colored text formats
- Context-local fields via `contextvars` (command, scheme, ...)
- Safe JSON serialization (bytes -> 0x hex, dataclasses -> dicts)
- Simple, dependency-free setup (stdlib only)

Usage
-----
    from vault_ids import logging as vlog

    vlog.configure(json=False, level="DEBUG")  # once, from the CLI entry point
    log = vlog.get_logger(__name__)

    vlog.bind(command="market")
    log.debug("derived id", extra={"scheme": "market"})

Library modules only log at DEBUG; handlers always write to stderr so stdout
stays reserved for results.
"""

from __future__ import annotations

import datetime as _dt
import io
import json as _json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Optional

# ----------------------------
# Context
# ----------------------------

_LOG_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("_LOG_CONTEXT", default={})

DEFAULT_CONTEXT_KEYS = ("command", "scheme")

# LogRecord attributes that are never treated as structured extras
_RECORD_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    )
)


def context() -> Dict[str, Any]:
    """Return a *copy* of the active logging context."""
    return dict(_LOG_CONTEXT.get())


def bind(**fields: Any) -> None:
    """Merge fields into the active context."""
    cur = dict(_LOG_CONTEXT.get())
    cur.update({k: _coerce_value(v) for k, v in fields.items()})
    _LOG_CONTEXT.set(cur)


def unbind(*keys: str) -> None:
    cur = dict(_LOG_CONTEXT.get())
    for k in keys:
        cur.pop(k, None)
    _LOG_CONTEXT.set(cur)


# ----------------------------
# JSON & Text formatters
# ----------------------------


def _utcnow_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="milliseconds")


def _coerce_value(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return "0x" + bytes(v).hex()
    if is_dataclass(v) and not isinstance(v, type):
        return {k: _coerce_value(x) for k, x in asdict(v).items()}
    return str(v)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _coerce_value(v)
        for k, v in record.__dict__.items()
        if not k.startswith("_") and k not in _RECORD_ATTRS
    }


_LEVEL_COLOR = {
    logging.DEBUG: "\x1b[90m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[1m\x1b[35m",
}
_RESET = "\x1b[0m"


def _supports_color(stream: Any) -> bool:
    try:
        return stream.isatty() and os.environ.get("NO_COLOR") is None
    except Exception:
        return False


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _utcnow_iso(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(context())
        for k, v in _extras(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["err"] = "".join(
                traceback.format_exception(*record.exc_info)
            ).rstrip()
        return _json.dumps(payload, separators=(",", ":"), default=str)


class TextFormatter(logging.Formatter):
    """
    Human-friendly one-liner:
      2026-01-05T12:34:56.789+00:00 | DEBUG | vault_ids.ids | command=market scheme=market | derived id
    With colors when supported.
    """

    def __init__(self, stream: Any):
        super().__init__()
        self._color = _supports_color(stream)

    def format(self, record: logging.LogRecord) -> str:
        ctx = context()
        fields = [f"{k}={ctx[k]}" for k in DEFAULT_CONTEXT_KEYS if ctx.get(k) is not None]
        fields += [f"{k}={v}" for k, v in _extras(record).items() if k not in ctx]

        lvl = f"{record.levelname:<5}"
        if self._color:
            lvl = f"{_LEVEL_COLOR.get(record.levelno, '')}{lvl}{_RESET}"

        line = f"{_utcnow_iso()} | {lvl} | {record.name}"
        if fields:
            line += " | " + " ".join(fields)
        line += f" | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info)).rstrip()
        return line


# ----------------------------
# Public setup API
# ----------------------------


def configure(
    *,
    json: Optional[bool] = None,
    level: str | int = "WARNING",
    stream: Optional[io.TextIOBase] = None,
) -> None:
    """
    Configure the `vault_ids` logger tree.

    Parameters
    ----------
    json : bool | None
        JSON lines if True, text if False; None follows VAULT_IDS_LOG_FORMAT.
    level : str | int
        Minimum log level.
    stream : TextIO
        Stream for the console handler (default: stderr at call time).
    """
    stream = stream if stream is not None else sys.stderr
    if json is None:
        json = os.environ.get("VAULT_IDS_LOG_FORMAT", "").strip().lower() == "json"

    root = get_logger()
    root.setLevel(_coerce_level(level))
    root.propagate = False
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(stream)
    console.setLevel(_coerce_level(level))
    console.setFormatter(JSONFormatter() if json else TextFormatter(stream))
    root.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the `vault_ids` namespace."""
    return logging.getLogger(name or "vault_ids")


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


__all__ = [
    "configure",
    "get_logger",
    "bind",
    "unbind",
    "context",
    "JSONFormatter",
    "TextFormatter",
]
