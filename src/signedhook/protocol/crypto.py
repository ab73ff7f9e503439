"""HMAC-SHA256 signature computation for signed-timestamp webhooks.

The signed message is ``<timestamp>.<payload>`` where ``<payload>`` is the
request body exactly as received.  Nothing here decodes, re-encodes or
canonicalizes the body: a single changed byte changes the MAC.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]
SecretLike = Union[str, bytes, bytearray]


def ensure_payload(payload: object) -> bytes:
    """Return *payload* as ``bytes``, refusing text.

    A ``str`` body has already been decoded by someone, and decoding is not
    guaranteed to round-trip to the bytes the sender signed.

    Raises:
        TypeError: If *payload* is not bytes-like.
    """
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, str):
        raise TypeError(
            "payload must be the raw request body bytes, not str; "
            "pass the body exactly as received"
        )
    raise TypeError(f"payload must be bytes, not {type(payload).__name__}")


def secret_bytes(secret: SecretLike) -> bytes:
    """Return *secret* as key bytes (``str`` secrets are UTF-8 encoded).

    Raises:
        ValueError: If the secret is empty.
        TypeError: If the secret is neither text nor bytes.
    """
    if isinstance(secret, str):
        key = secret.encode("utf-8")
    elif isinstance(secret, (bytes, bytearray)):
        key = bytes(secret)
    else:
        raise TypeError(f"secret must be str or bytes, not {type(secret).__name__}")
    if not key:
        raise ValueError("secret must not be empty")
    return key


def signed_message(timestamp: int | str, payload: BytesLike) -> bytes:
    """Build the exact byte string that gets signed: ``b"<timestamp>." + payload``.

    A ``str`` timestamp is used verbatim, so a received header is checked
    against the text its sender signed.
    """
    return str(timestamp).encode("ascii") + b"." + ensure_payload(payload)


def compute_signature(secret: SecretLike, timestamp: int | str, payload: BytesLike) -> bytes:
    """Compute the raw HMAC-SHA256 of ``<timestamp>.<payload>`` under *secret*.

    Returns:
        The 32-byte MAC (hex-encode it for the wire).
    """
    return hmac.new(
        secret_bytes(secret),
        signed_message(timestamp, payload),
        hashlib.sha256,
    ).digest()


def constant_time_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of where they differ.

    Delegates to ``hmac.compare_digest``.  Inputs of different length compare
    unequal rather than raising.
    """
    return hmac.compare_digest(a, b)
