"""Shared fixtures for signedhook SDK tests."""

from __future__ import annotations

import pytest

from signedhook.sdk.config import ENV_LOG_LEVEL, ENV_SCHEME, ENV_SECRETS, ENV_TOLERANCE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SIGNEDHOOK_* variables from the outer environment out of tests."""
    for name in (ENV_SECRETS, ENV_TOLERANCE, ENV_SCHEME, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)
