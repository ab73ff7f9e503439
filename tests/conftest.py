"""Shared test fixtures for signedhook tests."""

from __future__ import annotations

import pytest

from signedhook.protocol.crypto import compute_signature
from signedhook.protocol.header import format_header


@pytest.fixture()
def secret() -> str:
    return "whsec_test"


@pytest.fixture()
def old_secret() -> str:
    return "whsec_previous"


@pytest.fixture()
def payload() -> bytes:
    return b'{"id":"evt_1"}'


@pytest.fixture()
def timestamp() -> int:
    return 1614556800


@pytest.fixture()
def signed_header(secret, payload, timestamp) -> str:
    """A valid ``t=...,v1=...`` header for (secret, payload, timestamp)."""
    return format_header(timestamp, [compute_signature(secret, timestamp, payload)])
