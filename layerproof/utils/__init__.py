"""Utility helpers for LayerProof."""

from .logging_config import setup_logging
from .openai_client import get_client, get_model_name, get_provider, provider_secrets
from .redact import redact_secret

__all__ = [
    "setup_logging",
    "get_client",
    "get_model_name",
    "get_provider",
    "provider_secrets",
    "redact_secret",
]
