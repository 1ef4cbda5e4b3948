"""
Runtime configuration for LayerProof.

Settings come from environment variables (optionally loaded from a ``.env``
file) and can be overridden by a YAML file.

Environment Variables:
    OPENAI_API_KEY: Provider credential
    LAYERPROOF_MODEL: Chat model used for checking (default: gpt-4o-mini)
    LAYERPROOF_TEMPERATURE: Sampling temperature (default: 0.1)
    LAYERPROOF_MAX_TOKENS: Completion length cap (default: 1000)
    LAYERPROOF_CONCURRENCY: Default group width (default: 4)
    LAYERPROOF_DELAY_MS: Default pause between groups (default: 200)
    LAYERPROOF_LOG_LEVEL: Logging level name (default: INFO)
    LAYERPROOF_CORS_ORIGINS: Comma-separated allowed origins (default: *)

Usage:
    >>> from layerproof.config import get_settings
    >>> settings = get_settings()
    >>> settings.model
    'gpt-4o-mini'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from dotenv import load_dotenv

from .types import DEFAULT_CONCURRENCY, DEFAULT_DELAY_MS


@dataclass(frozen=True)
class RelaySettings:
    """Process-wide, read-only configuration.

    Attributes:
        openai_api_key: Provider credential (never included in repr)
        model: Model name passed to the provider
        temperature: Sampling temperature for checks
        max_tokens: Maximum completion tokens per check
        default_concurrency: Group width when a request does not set one
        default_delay_ms: Inter-group pause when a request does not set one
        log_level: Logging level name
        cors_origins: Origins allowed by the CORS middleware
    """

    openai_api_key: str = field(default="", repr=False)
    model: str = "gpt-4o-mini"
    temperature: float = 0.1
    max_tokens: int = 1000
    default_concurrency: int = DEFAULT_CONCURRENCY
    default_delay_ms: int = DEFAULT_DELAY_MS
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or ("*",)


def load_settings(env_file: str | Path | None = None) -> RelaySettings:
    """Build settings from the environment, loading ``.env`` first if present."""
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return RelaySettings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        model=os.getenv("LAYERPROOF_MODEL", "gpt-4o-mini"),
        temperature=float(os.getenv("LAYERPROOF_TEMPERATURE", "0.1")),
        max_tokens=int(os.getenv("LAYERPROOF_MAX_TOKENS", "1000")),
        default_concurrency=int(
            os.getenv("LAYERPROOF_CONCURRENCY", str(DEFAULT_CONCURRENCY))
        ),
        default_delay_ms=int(os.getenv("LAYERPROOF_DELAY_MS", str(DEFAULT_DELAY_MS))),
        log_level=os.getenv("LAYERPROOF_LOG_LEVEL", "INFO"),
        cors_origins=_split_origins(os.getenv("LAYERPROOF_CORS_ORIGINS", "*")),
    )


def load_settings_file(
    path: str | Path,
    base: RelaySettings | None = None,
) -> RelaySettings:
    """Overlay the keys of a YAML file on top of ``base`` (or the environment)."""
    data: Dict[str, Any] = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    known = {f.name for f in fields(RelaySettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings in {path}: {', '.join(unknown)}")

    if "cors_origins" in data:
        origins = data["cors_origins"]
        if isinstance(origins, str):
            data["cors_origins"] = _split_origins(origins)
        else:
            data["cors_origins"] = tuple(origins)

    return replace(base or load_settings(), **data)


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    """Get the process-wide settings instance."""
    return load_settings()
