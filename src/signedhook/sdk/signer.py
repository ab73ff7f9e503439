"""Sender-side signature header generation.

Produces the header a webhook sender attaches to a request.  Mostly useful
for tests and local tooling; the receiving side only needs
:mod:`signedhook.sdk.verifier`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from signedhook.protocol.crypto import BytesLike, SecretLike, compute_signature, ensure_payload
from signedhook.protocol.header import format_header
from signedhook.protocol.types import DEFAULT_SCHEME

logger = logging.getLogger(__name__)


def generate_header(
    payload: BytesLike,
    secrets: SecretLike | Sequence[SecretLike],
    timestamp: int | None = None,
    scheme: str = DEFAULT_SCHEME,
) -> str:
    """Sign *payload* and return a ``t=...,v1=...`` header string.

    One signature entry is emitted per secret, in order, which is what a
    sender does while rotating secrets.

    Args:
        payload: The exact body bytes that will be sent.
        secrets: A single secret or a sequence of secrets.
        timestamp: Unix seconds to sign with; defaults to now.
        scheme: Scheme tag for the signature entries.
    """
    body = ensure_payload(payload)
    if isinstance(secrets, (str, bytes, bytearray)):
        secrets = [secrets]
    if not secrets:
        raise ValueError("at least one secret is required")
    ts = int(time.time()) if timestamp is None else timestamp
    if ts < 0:
        raise ValueError("timestamp must be non-negative")
    signatures = [compute_signature(secret, ts, body) for secret in secrets]
    logger.debug("Signed %d-byte payload with %d secret(s)", len(body), len(signatures))
    return format_header(ts, signatures, scheme=scheme)
