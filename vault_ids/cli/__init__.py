"""
vault_ids.cli
=============

Typer-based command-line interface, installed as the `vault-ids` console
script. The library itself never imports this package, so Typer is only
loaded when the CLI is actually used.

    >>> from vault_ids.cli import run
    >>> run(["adapter", "0xAcd4fFdBABDc627e5474FA9d507Db1436CF65Cc7"])
    0
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List

__all__: List[str] = ["app", "run"]

_SUBMODULE = "vault_ids.cli.main"


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in __all__:
        return getattr(import_module(_SUBMODULE), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
