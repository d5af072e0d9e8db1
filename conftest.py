"""
Repository-level pytest configuration.

Keeps every test isolated from the developer's environment:
  - configuration is reloaded from scratch for each test
  - environment overrides for suite settings are cleared unless a test sets them
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from autotest_core.common import reset_config


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch) -> Generator[None, None, None]:
    """
    Drop cached configuration and suite env overrides around each test.
    """
    for key in list(os.environ):
        if key.startswith(("SUITE__", "LOGGING__")):
            monkeypatch.delenv(key, raising=False)

    reset_config()
    yield
    reset_config()
