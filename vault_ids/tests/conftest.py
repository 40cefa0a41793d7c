from __future__ import annotations

import logging

import pytest

from vault_ids.config import load_config


@pytest.fixture(autouse=True)
def _fresh_config_and_logging():
    """Every test sees the current environment and an unconfigured logger."""
    load_config.cache_clear()
    yield
    load_config.cache_clear()
    root = logging.getLogger("vault_ids")
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)
    root.propagate = True
