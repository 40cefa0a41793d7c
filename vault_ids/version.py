"""vault_ids.version — package version.

Resolution order (first match wins):
- VAULT_IDS_VERSION environment variable (exact value)
- installed package metadata for 'vault-ids'
- BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Optional

# Bump on any change to identifier or encoding outputs.
BASE_VERSION = "0.1.0"

DIST_NAME = "vault-ids"


def _pkg_metadata_version(dist_name: str = DIST_NAME) -> Optional[str]:
    """Try to read installed package version; None if unavailable."""
    try:
        v = importlib_metadata.version(dist_name)
        return v if v and v != "0.0.0" else None
    except importlib_metadata.PackageNotFoundError:
        return None


@lru_cache(maxsize=1)
def compute_version() -> str:
    val = os.getenv("VAULT_IDS_VERSION")
    if val:
        return val
    return _pkg_metadata_version() or f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
