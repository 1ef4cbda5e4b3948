"""Keep credentials out of anything sent back to clients."""

from __future__ import annotations

REDACTED = "***"


def redact_secret(text: str, *secrets: str | None) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text
