"""signedhook exception hierarchy.

All library-specific exceptions inherit from :class:`SignedHookError`.
Verification itself never raises these for a bad request -- it returns a
:class:`~signedhook.protocol.types.Rejected` value.  The parser and the
raising convenience API (:func:`signedhook.sdk.verifier.verify_header`) do.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signedhook.protocol.types import RejectionReason


class SignedHookError(Exception):
    """Base exception for all signedhook errors."""


class HeaderParseError(SignedHookError):
    """Raised when a signature header string fails to parse."""


class InvalidTimestampError(HeaderParseError):
    """Raised when the ``t`` entry is missing, repeated, or not a base-10 integer."""


class InvalidSignatureEncodingError(HeaderParseError):
    """Raised when a signature of the expected scheme is not valid hex of the right length."""


class NoMatchingSchemeError(HeaderParseError):
    """Raised when the header carries no signature of the expected scheme."""


class SignatureVerificationError(SignedHookError):
    """Raised by the raising API when a payload is rejected.

    The :attr:`reason` is for server-side diagnostics only and must not be
    returned to the webhook sender.
    """

    def __init__(self, reason: RejectionReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"webhook signature rejected: {reason.value}")
