"""signedhook SDK -- verify and sign webhook payloads."""

from signedhook.sdk.config import VerifierConfig
from signedhook.sdk.signer import generate_header
from signedhook.sdk.verifier import WebhookVerifier, verify, verify_header

__all__ = ["VerifierConfig", "WebhookVerifier", "generate_header", "verify", "verify_header"]
