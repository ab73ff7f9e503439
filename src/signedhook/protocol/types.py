"""Core types and constants for the signed-timestamp webhook scheme."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# Header key carrying the signing time (unix seconds)
TIMESTAMP_KEY = "t"

# Scheme tag of the current HMAC-SHA256 signature
DEFAULT_SCHEME = "v1"

# Default freshness window in seconds (5 minutes)
DEFAULT_TOLERANCE = 300

# HMAC-SHA256 digest size in bytes
SIGNATURE_SIZE = 32

# Conventional HTTP header name carrying the signature string
SIGNATURE_HEADER = "Webhook-Signature"


class RejectionReason(str, Enum):
    """Why a webhook payload was rejected.

    Using ``str, Enum`` so that ``RejectionReason.SIGNATURE_MISMATCH ==
    "signature_mismatch"`` is True.
    """

    MALFORMED_HEADER = "malformed_header"
    NO_MATCHING_SCHEME = "no_matching_scheme"
    SIGNATURE_MISMATCH = "signature_mismatch"
    TIMESTAMP_OUT_OF_TOLERANCE = "timestamp_out_of_tolerance"


@dataclass(frozen=True)
class SignatureEntry:
    """One presented signature: its scheme tag and decoded MAC bytes."""

    scheme: str
    value: bytes

    def __repr__(self) -> str:
        return f"SignatureEntry(scheme={self.scheme!r}, value=<{len(self.value)} bytes>)"


@dataclass(frozen=True)
class SignatureHeader:
    """A parsed signature header.

    ``signatures`` keeps wire order.  ``extras`` holds every ``key=value``
    pair the parser does not act on, so newer header fields survive a parse.
    ``raw_timestamp`` keeps the ``t`` text verbatim (``"01614556800"`` and
    ``"1614556800"`` sign differently).
    """

    timestamp: int
    signatures: tuple[SignatureEntry, ...]
    extras: tuple[tuple[str, str], ...] = ()
    raw_timestamp: str | None = None

    @property
    def signed_timestamp(self) -> str:
        """The timestamp text as it appeared on the wire; this is what was signed."""
        if self.raw_timestamp is not None:
            return self.raw_timestamp
        return str(self.timestamp)

    def signatures_for(self, scheme: str) -> tuple[bytes, ...]:
        """Return the decoded signatures tagged with *scheme*, in wire order."""
        return tuple(e.value for e in self.signatures if e.scheme == scheme)

    @property
    def schemes(self) -> tuple[str, ...]:
        """Distinct schemes present, in order of first appearance."""
        seen: list[str] = []
        for entry in self.signatures:
            if entry.scheme not in seen:
                seen.append(entry.scheme)
        return tuple(seen)


@dataclass(frozen=True)
class Verified:
    """Successful verification."""

    matched_scheme: str

    ok = True

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Failed verification with the reason it failed."""

    reason: RejectionReason

    ok = False

    def __bool__(self) -> bool:
        return False


VerificationResult = Union[Verified, Rejected]
