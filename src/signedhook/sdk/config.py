"""Verifier configuration via dataclass (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from signedhook.protocol.header import is_signature_key
from signedhook.protocol.types import DEFAULT_SCHEME, DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)

ENV_SECRETS = "SIGNEDHOOK_SECRETS"
ENV_TOLERANCE = "SIGNEDHOOK_TOLERANCE"
ENV_SCHEME = "SIGNEDHOOK_SCHEME"
ENV_LOG_LEVEL = "SIGNEDHOOK_LOG_LEVEL"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _split_secrets(raw: str) -> list[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


@dataclass
class VerifierConfig:
    """Configuration for a :class:`~signedhook.sdk.verifier.WebhookVerifier`.

    The verification functions themselves never read the environment; this
    class exists for the CLI and for applications that provision secrets
    through environment variables.

    Priority (highest wins): constructor arg > env var > default.
    """

    secrets: list[str] = field(default_factory=list)
    tolerance: int = DEFAULT_TOLERANCE
    scheme: str = DEFAULT_SCHEME
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        if not is_signature_key(self.scheme):
            raise ValueError(f"Invalid signature scheme {self.scheme!r}, expected v<n>")
        self.log_level = self.log_level.upper()
        if self.log_level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {self.log_level!r}. "
                f"Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
            )

    def __repr__(self) -> str:
        return (
            f"VerifierConfig(secrets=<{len(self.secrets)} hidden>, "
            f"tolerance={self.tolerance}, scheme={self.scheme!r}, "
            f"log_level={self.log_level!r})"
        )

    @classmethod
    def from_env(
        cls,
        secrets: list[str] | None = None,
        tolerance: int | None = None,
        scheme: str | None = None,
        log_level: str | None = None,
    ) -> VerifierConfig:
        """Build a config from arguments, falling back to environment variables.

        ``SIGNEDHOOK_SECRETS`` is a comma-separated list in rotation order
        (current secret first).
        """
        if not secrets:
            secrets = _split_secrets(os.getenv(ENV_SECRETS, ""))
        if tolerance is None:
            raw = os.getenv(ENV_TOLERANCE)
            try:
                tolerance = int(raw) if raw else DEFAULT_TOLERANCE
            except ValueError:
                raise ValueError(f"{ENV_TOLERANCE} must be an integer, got {raw!r}") from None
        if scheme is None:
            scheme = os.getenv(ENV_SCHEME, DEFAULT_SCHEME)
        if log_level is None:
            log_level = os.getenv(ENV_LOG_LEVEL, "WARNING")
        config = cls(
            secrets=list(secrets),
            tolerance=tolerance,
            scheme=scheme,
            log_level=log_level,
        )
        logger.debug("Loaded %r", config)
        return config
