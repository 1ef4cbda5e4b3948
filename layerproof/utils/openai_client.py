"""
Async provider clients for LayerProof.

OpenAI is used with the key from ``RelaySettings``. When both
AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT are set, Azure OpenAI takes
over and model names are mapped to deployment names:

    AZURE_OPENAI_API_VERSION            (default: 2024-02-15-preview)
    AZURE_OPENAI_DEPLOYMENT_GPT4O       deployment serving gpt-4o
    AZURE_OPENAI_DEPLOYMENT_GPT4O_MINI  deployment serving gpt-4o-mini

Usage:
    >>> client = get_client(settings)
    >>> get_model_name(settings.model)
    'gpt-4o-mini'
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Dict, Optional, Tuple

if TYPE_CHECKING:
    from openai import AsyncAzureOpenAI, AsyncOpenAI

    from ..config import RelaySettings

logger = logging.getLogger(__name__)

DEFAULT_AZURE_API_VERSION = "2024-02-15-preview"


@dataclass(frozen=True)
class AzureTarget:
    endpoint: str
    api_key: str
    api_version: str
    deployments: Dict[str, str]


def _azure_target() -> Optional[AzureTarget]:
    api_key = os.getenv("AZURE_OPENAI_API_KEY")
    endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
    if not (api_key and endpoint):
        return None
    return AzureTarget(
        endpoint=endpoint,
        api_key=api_key,
        api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_AZURE_API_VERSION),
        deployments={
            "gpt-4o": os.getenv("AZURE_OPENAI_DEPLOYMENT_GPT4O", "gpt-4o"),
            "gpt-4o-mini": os.getenv("AZURE_OPENAI_DEPLOYMENT_GPT4O_MINI", "gpt-4o-mini"),
        },
    )


def is_azure_configured() -> bool:
    return _azure_target() is not None


@lru_cache(maxsize=4)
def get_client(settings: "RelaySettings") -> "AsyncOpenAI | AsyncAzureOpenAI":
    """
    Build (once per settings object) the client used for checks.

    SDK retries are turned off; a failed call fails its layer once.

    Raises:
        ValueError: If neither an OpenAI key nor an Azure endpoint is configured
    """
    azure = _azure_target()
    if azure is not None:
        from openai import AsyncAzureOpenAI

        logger.info("Using Azure OpenAI client: %s", azure.endpoint)
        return AsyncAzureOpenAI(
            azure_endpoint=azure.endpoint,
            api_key=azure.api_key,
            api_version=azure.api_version,
            max_retries=0,
        )

    if not settings.openai_api_key:
        raise ValueError(
            "No OpenAI configuration found. Set OPENAI_API_KEY, or "
            "AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT for Azure OpenAI"
        )

    from openai import AsyncOpenAI

    logger.info("Using OpenAI client")
    return AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)


def get_model_name(model: str) -> str:
    """Return ``model``, or its Azure deployment name when Azure is active."""
    azure = _azure_target()
    if azure is None:
        return model
    deployment = azure.deployments.get(model, model)
    logger.debug("Azure model mapping: %s -> %s", model, deployment)
    return deployment


def get_provider() -> str:
    return "azure" if is_azure_configured() else "openai"


def provider_secrets(settings: "RelaySettings") -> Tuple[str, ...]:
    """Every credential a provider error message could echo back."""
    secrets = [settings.openai_api_key, os.getenv("AZURE_OPENAI_API_KEY", "")]
    return tuple(secret for secret in secrets if secret)
