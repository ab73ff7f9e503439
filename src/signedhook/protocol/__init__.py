"""signedhook protocol -- wire format, types and MAC computation.

Public API re-exports for ``signedhook.protocol``.
"""

from signedhook.protocol.types import (
    DEFAULT_SCHEME,
    DEFAULT_TOLERANCE,
    SIGNATURE_HEADER,
    SIGNATURE_SIZE,
    TIMESTAMP_KEY,
    RejectionReason,
    Rejected,
    SignatureEntry,
    SignatureHeader,
    VerificationResult,
    Verified,
)

from signedhook.protocol.errors import (
    SignedHookError,
    HeaderParseError,
    InvalidTimestampError,
    InvalidSignatureEncodingError,
    NoMatchingSchemeError,
    SignatureVerificationError,
)

from signedhook.protocol.header import format_header, is_signature_key, parse_header

from signedhook.protocol.crypto import (
    compute_signature,
    constant_time_equal,
    signed_message,
)

__all__ = [
    # Types
    "DEFAULT_SCHEME",
    "DEFAULT_TOLERANCE",
    "SIGNATURE_HEADER",
    "SIGNATURE_SIZE",
    "TIMESTAMP_KEY",
    "RejectionReason",
    "Rejected",
    "SignatureEntry",
    "SignatureHeader",
    "VerificationResult",
    "Verified",
    # Errors
    "SignedHookError",
    "HeaderParseError",
    "InvalidTimestampError",
    "InvalidSignatureEncodingError",
    "NoMatchingSchemeError",
    "SignatureVerificationError",
    # Header
    "format_header",
    "is_signature_key",
    "parse_header",
    # Crypto
    "compute_signature",
    "constant_time_equal",
    "signed_message",
]
