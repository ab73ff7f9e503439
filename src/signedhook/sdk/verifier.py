"""Receiver-side webhook signature verification.

Verifies that a webhook body was signed by a holder of one of the shared
secrets and that the signing time is fresh.  Signature validity is decided
before freshness, so a stale-but-forged request and a fresh-but-forged
request look the same to the caller.

Usage::

    from signedhook import verify

    result = verify(
        raw_body,                               # bytes, exactly as received
        request.headers["Webhook-Signature"],
        [current_secret, previous_secret],      # rotation order
        tolerance_seconds=300,
        current_time=int(time.time()),
    )
    if not result:
        return Response(status_code=400)        # never echo result.reason
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from signedhook.protocol.crypto import (
    BytesLike,
    SecretLike,
    compute_signature,
    constant_time_equal,
    ensure_payload,
    secret_bytes,
)
from signedhook.protocol.errors import (
    HeaderParseError,
    NoMatchingSchemeError,
    SignatureVerificationError,
)
from signedhook.protocol.header import parse_header
from signedhook.protocol.types import (
    DEFAULT_SCHEME,
    DEFAULT_TOLERANCE,
    RejectionReason,
    Rejected,
    SignatureHeader,
    VerificationResult,
    Verified,
)
from signedhook.sdk.config import VerifierConfig

logger = logging.getLogger(__name__)


def _check_secrets(secrets: Sequence[SecretLike]) -> list[bytes]:
    if isinstance(secrets, (str, bytes, bytearray)):
        raise TypeError("secrets must be a sequence of secrets, not a single secret")
    keys = [secret_bytes(s) for s in secrets]
    if not keys:
        raise ValueError("at least one secret is required")
    return keys


def _check_tolerance(tolerance_seconds: int) -> None:
    if tolerance_seconds < 0:
        raise ValueError("tolerance_seconds must be non-negative")


def _match_any(
    keys: Sequence[bytes],
    timestamp: str,
    payload: bytes,
    presented: Sequence[bytes],
) -> bool:
    # Every (secret, signature) pair is compared; no early exit.
    matched = False
    for key in keys:
        expected = compute_signature(key, timestamp, payload)
        for candidate in presented:
            matched |= constant_time_equal(expected, candidate)
    return matched


def _evaluate(
    raw_payload: BytesLike,
    signature_header: str | None,
    secrets: Sequence[SecretLike],
    tolerance_seconds: int,
    current_time: float,
    scheme: str,
) -> SignatureHeader | Rejected:
    """Run every check; return the parsed header if the payload verifies."""
    payload = ensure_payload(raw_payload)
    keys = _check_secrets(secrets)
    _check_tolerance(tolerance_seconds)

    try:
        header = parse_header(signature_header, scheme=scheme)
    except NoMatchingSchemeError:
        logger.debug("Webhook rejected: no %s signature in header", scheme)
        return Rejected(RejectionReason.NO_MATCHING_SCHEME)
    except HeaderParseError as exc:
        logger.debug("Webhook rejected: malformed signature header (%s)", type(exc).__name__)
        return Rejected(RejectionReason.MALFORMED_HEADER)

    if not _match_any(keys, header.signed_timestamp, payload, header.signatures_for(scheme)):
        logger.debug("Webhook rejected: signature mismatch")
        return Rejected(RejectionReason.SIGNATURE_MISMATCH)

    if tolerance_seconds > 0 and abs(current_time - header.timestamp) > tolerance_seconds:
        logger.debug(
            "Webhook rejected: timestamp outside %ds tolerance", tolerance_seconds
        )
        return Rejected(RejectionReason.TIMESTAMP_OUT_OF_TOLERANCE)

    return header


def verify(
    raw_payload: BytesLike,
    signature_header: str | None,
    secrets: Sequence[SecretLike],
    tolerance_seconds: int,
    current_time: float,
    *,
    scheme: str = DEFAULT_SCHEME,
) -> VerificationResult:
    """Verify a signed webhook payload.

    Args:
        raw_payload: The request body bytes exactly as received.
        signature_header: The raw signature header value.  ``None`` (header
            absent) is rejected as a malformed header.
        secrets: Candidate secrets, tried in order (current first while
            rotating).
        tolerance_seconds: Maximum allowed distance between *current_time*
            and the signed timestamp.  ``0`` disables the freshness check.
        current_time: Unix seconds "now", supplied by the caller.
        scheme: Signature scheme to check (default ``v1``).

    Returns:
        :class:`Verified` or :class:`Rejected`.  A bad request never raises.

    Raises:
        TypeError: If *raw_payload* is ``str`` or *secrets* is a single secret.
        ValueError: If *secrets* is empty, contains an empty secret, or
            *tolerance_seconds* is negative.
    """
    outcome = _evaluate(
        raw_payload, signature_header, secrets, tolerance_seconds, current_time, scheme
    )
    if isinstance(outcome, Rejected):
        return outcome
    return Verified(matched_scheme=scheme)


def verify_header(
    raw_payload: BytesLike,
    signature_header: str | None,
    secrets: Sequence[SecretLike],
    tolerance_seconds: int = DEFAULT_TOLERANCE,
    current_time: float | None = None,
    *,
    scheme: str = DEFAULT_SCHEME,
) -> SignatureHeader:
    """Like :func:`verify`, but raise on rejection.

    *current_time* defaults to ``time.time()``.

    Returns:
        The parsed :class:`SignatureHeader` of a verified payload.

    Raises:
        SignatureVerificationError: If the payload is rejected; the
            exception's ``reason`` holds the :class:`RejectionReason`.
    """
    now = time.time() if current_time is None else current_time
    outcome = _evaluate(
        raw_payload, signature_header, secrets, tolerance_seconds, now, scheme
    )
    if isinstance(outcome, Rejected):
        raise SignatureVerificationError(outcome.reason)
    return outcome


@dataclass(frozen=True)
class WebhookVerifier:
    """Verifier bound to a fixed set of secrets and a tolerance.

    Holds configuration only, so one instance can be shared by any number of
    threads or tasks.  ``clock`` supplies "now" when the caller does not.
    """

    secrets: tuple[SecretLike, ...]
    tolerance: int = DEFAULT_TOLERANCE
    scheme: str = DEFAULT_SCHEME
    clock: Callable[[], float] = field(default=time.time, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "secrets", tuple(_check_secrets(self.secrets)))
        _check_tolerance(self.tolerance)

    def __repr__(self) -> str:
        return (
            f"WebhookVerifier(secrets=<{len(self.secrets)} hidden>, "
            f"tolerance={self.tolerance}, scheme={self.scheme!r})"
        )

    @classmethod
    def from_config(cls, config: VerifierConfig) -> WebhookVerifier:
        """Build a verifier from a :class:`VerifierConfig`."""
        return cls(
            secrets=tuple(config.secrets),
            tolerance=config.tolerance,
            scheme=config.scheme,
        )

    def verify(
        self,
        raw_payload: BytesLike,
        signature_header: str | None,
        current_time: float | None = None,
    ) -> VerificationResult:
        """Verify *raw_payload* against *signature_header*; see :func:`verify`."""
        now = self.clock() if current_time is None else current_time
        return verify(
            raw_payload,
            signature_header,
            self.secrets,
            self.tolerance,
            now,
            scheme=self.scheme,
        )

    def verify_header(
        self,
        raw_payload: BytesLike,
        signature_header: str | None,
        current_time: float | None = None,
    ) -> SignatureHeader:
        """Raising variant of :meth:`verify`; see :func:`verify_header`."""
        now = self.clock() if current_time is None else current_time
        return verify_header(
            raw_payload,
            signature_header,
            self.secrets,
            self.tolerance,
            now,
            scheme=self.scheme,
        )
