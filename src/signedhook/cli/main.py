"""signedhook CLI -- sign and verify webhook payloads from the shell.

Thin wrapper around the SDK using click.  Payload files are always read in
binary mode so the bytes checked are the bytes on disk.
"""

from __future__ import annotations

import logging
import time

import click

from signedhook.protocol import SignedHookError
from signedhook.sdk.config import VerifierConfig
from signedhook.sdk.signer import generate_header
from signedhook.sdk.verifier import WebhookVerifier


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


def _load_config(
    secrets: tuple[str, ...],
    tolerance: int | None = None,
    scheme: str | None = None,
) -> VerifierConfig:
    try:
        config = VerifierConfig.from_env(
            secrets=list(secrets), tolerance=tolerance, scheme=scheme
        )
    except ValueError as exc:
        _error(f"Error: {exc}")
    if not config.secrets:
        _error("Error: no secret given. Use --secret or set SIGNEDHOOK_SECRETS.")
    return config


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="signedhook")
@click.option(
    "--log-level",
    envvar="SIGNEDHOOK_LOG_LEVEL",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """signedhook -- signed-timestamp HMAC webhook signatures."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# signedhook sign
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("payload", type=click.File("rb"))
@click.option(
    "--secret",
    "-s",
    "secrets",
    multiple=True,
    help="Signing secret (repeatable; default: SIGNEDHOOK_SECRETS).",
)
@click.option("--timestamp", "-t", type=click.IntRange(min=0), default=None, help="Unix seconds (default: now).")
@click.option("--scheme", default=None, help="Signature scheme tag (default: v1).")
def sign(payload, secrets: tuple[str, ...], timestamp: int | None, scheme: str | None) -> None:
    """Print a signature header for the PAYLOAD file ('-' for stdin)."""
    config = _load_config(secrets, scheme=scheme)
    body = payload.read()
    try:
        header = generate_header(body, config.secrets, timestamp=timestamp, scheme=config.scheme)
    except (SignedHookError, ValueError) as exc:
        _error(f"Error: {exc}")
    click.echo(header)


# ---------------------------------------------------------------------------
# signedhook verify
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("payload", type=click.File("rb"))
@click.option("--header", "-H", "signature_header", required=True, help="Signature header value.")
@click.option(
    "--secret",
    "-s",
    "secrets",
    multiple=True,
    help="Candidate secret, current first (repeatable; default: SIGNEDHOOK_SECRETS).",
)
@click.option(
    "--tolerance",
    type=click.IntRange(min=0),
    default=None,
    help="Freshness window in seconds, 0 disables (default: 300).",
)
@click.option("--now", type=int, default=None, help="Current unix time (default: system clock).")
@click.option("--scheme", default=None, help="Signature scheme tag (default: v1).")
def verify(
    payload,
    signature_header: str,
    secrets: tuple[str, ...],
    tolerance: int | None,
    now: int | None,
    scheme: str | None,
) -> None:
    """Verify the PAYLOAD file ('-' for stdin) against a signature header.

    Exits 0 when verified and 1 when rejected.
    """
    config = _load_config(secrets, tolerance=tolerance, scheme=scheme)
    verifier = WebhookVerifier.from_config(config)
    body = payload.read()
    current_time = time.time() if now is None else now
    result = verifier.verify(body, signature_header, current_time=current_time)
    if not result:
        _error(f"rejected: {result.reason.value}")
    click.echo(f"verified ({result.matched_scheme})")
