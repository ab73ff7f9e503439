"""Signature header parsing and formatting.

A signature header has the form::

    t=1614556800,v1=5257a869...,v1=9f0c3e11...,v0=6ffbb59b...

``t`` is the signing time in unix seconds.  Each ``v<n>`` key carries one
hex-encoded signature of scheme ``v<n>``; a key may repeat (senders emit one
``v1`` entry per active secret while rotating).  Unknown keys are kept but
never acted upon.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from signedhook.protocol.errors import (
    HeaderParseError,
    InvalidSignatureEncodingError,
    InvalidTimestampError,
    NoMatchingSchemeError,
)
from signedhook.protocol.types import (
    DEFAULT_SCHEME,
    SIGNATURE_SIZE,
    TIMESTAMP_KEY,
    SignatureEntry,
    SignatureHeader,
)

# Up to 20 digits covers any 64-bit unix time, leading zeros included
_MAX_TIMESTAMP_DIGITS = 20
_TIMESTAMP_RE = re.compile(r"[0-9]{1,%d}" % _MAX_TIMESTAMP_DIGITS)
_SCHEME_RE = re.compile(r"v[0-9]+")
_LOWER_HEX_RE = re.compile(r"(?:[0-9a-f]{2})*")
_ANY_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def is_signature_key(key: str) -> bool:
    """Return ``True`` if *key* names a signature scheme (``v0``, ``v1``, ...)."""
    return _SCHEME_RE.fullmatch(key) is not None


def _split_pairs(header: str) -> list[tuple[str, str]]:
    if not isinstance(header, str):
        raise HeaderParseError(
            f"Signature header must be str, not {type(header).__name__}"
        )
    normalized = header.strip()
    if not normalized:
        raise HeaderParseError("Signature header is empty")
    pairs: list[tuple[str, str]] = []
    for index, segment in enumerate(normalized.split(",")):
        key, sep, value = segment.partition("=")
        key = key.strip()
        if not sep or not key:
            raise HeaderParseError(
                f"Segment {index} of signature header is not a key=value pair"
            )
        pairs.append((key, value.strip()))
    return pairs


def _parse_timestamp(values: list[str]) -> tuple[int, str]:
    if not values:
        raise InvalidTimestampError("Signature header has no timestamp")
    if len(values) > 1:
        raise InvalidTimestampError("Signature header has more than one timestamp")
    raw = values[0]
    if _TIMESTAMP_RE.fullmatch(raw) is None:
        raise InvalidTimestampError(
            f"Timestamp is not a base-10 integer of at most "
            f"{_MAX_TIMESTAMP_DIGITS} digits: {raw[:32]!r}"
        )
    return int(raw), raw


def parse_header(
    header: str,
    scheme: str = DEFAULT_SCHEME,
    digest_size: int = SIGNATURE_SIZE,
) -> SignatureHeader:
    """Parse a raw signature header string.

    Signatures of *scheme* must be exactly ``2 * digest_size`` lowercase hex
    characters.  Signatures of other schemes are decoded if they are hex and
    otherwise kept verbatim in ``extras``.

    Raises:
        HeaderParseError: If the header is not a ``str`` (e.g. ``None`` for a
            missing header), is empty, or a segment has no ``=``.
        InvalidTimestampError: If ``t`` is missing, repeated, or not a
            non-negative base-10 integer of at most 20 digits.
        InvalidSignatureEncodingError: If a *scheme* signature is malformed.
        NoMatchingSchemeError: If no signature of *scheme* is present.
    """
    timestamps: list[str] = []
    signatures: list[SignatureEntry] = []
    extras: list[tuple[str, str]] = []
    expected_len = 2 * digest_size

    for key, value in _split_pairs(header):
        if key == TIMESTAMP_KEY:
            timestamps.append(value)
        elif key == scheme:
            if len(value) != expected_len or _LOWER_HEX_RE.fullmatch(value) is None:
                raise InvalidSignatureEncodingError(
                    f"{scheme} signature must be {expected_len} lowercase hex characters"
                )
            signatures.append(SignatureEntry(scheme=key, value=bytes.fromhex(value)))
        elif is_signature_key(key) and _ANY_HEX_RE.fullmatch(value) is not None:
            signatures.append(SignatureEntry(scheme=key, value=bytes.fromhex(value)))
        else:
            extras.append((key, value))

    timestamp, raw_timestamp = _parse_timestamp(timestamps)
    if not any(entry.scheme == scheme for entry in signatures):
        raise NoMatchingSchemeError(f"Signature header has no {scheme} signature")

    return SignatureHeader(
        timestamp=timestamp,
        signatures=tuple(signatures),
        extras=tuple(extras),
        raw_timestamp=raw_timestamp,
    )


def format_header(
    timestamp: int,
    signatures: Iterable[bytes],
    scheme: str = DEFAULT_SCHEME,
) -> str:
    """Encode *timestamp* and *signatures* as a wire-format header string."""
    if timestamp < 0:
        raise ValueError("timestamp must be non-negative")
    parts = [f"{TIMESTAMP_KEY}={timestamp}"]
    parts.extend(f"{scheme}={sig.hex()}" for sig in signatures)
    return ",".join(parts)
