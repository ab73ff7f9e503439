"""signedhook -- signed-timestamp HMAC webhook verification.

Top-level convenience re-exports::

    from signedhook import verify, Verified, Rejected
    from signedhook.protocol import parse_header  # wire-level functions
"""

__version__ = "0.1.0"

from signedhook.protocol import (
    DEFAULT_SCHEME,
    DEFAULT_TOLERANCE,
    HeaderParseError,
    RejectionReason,
    Rejected,
    SignatureHeader,
    SignatureVerificationError,
    SignedHookError,
    VerificationResult,
    Verified,
    compute_signature,
    parse_header,
)
from signedhook.sdk import (
    VerifierConfig,
    WebhookVerifier,
    generate_header,
    verify,
    verify_header,
)

__all__ = [
    "__version__",
    "DEFAULT_SCHEME",
    "DEFAULT_TOLERANCE",
    "HeaderParseError",
    "RejectionReason",
    "Rejected",
    "SignatureHeader",
    "SignatureVerificationError",
    "SignedHookError",
    "VerificationResult",
    "Verified",
    "VerifierConfig",
    "WebhookVerifier",
    "compute_signature",
    "generate_header",
    "parse_header",
    "verify",
    "verify_header",
]
