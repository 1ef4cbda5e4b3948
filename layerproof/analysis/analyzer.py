"""
Single-layer grammar analysis through OpenAI chat completions.

Each call sends one layer's text with a fixed checking instruction, then
parses and sanitizes the returned issue list. Failures are confined to the
layer being checked (see ``BaseAnalyzer.analyze``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import openai

from ..config import RelaySettings
from ..exceptions import ProviderResponseError
from ..types import Issue, TextFragment
from ..utils.openai_client import get_client, get_model_name
from .base import BaseAnalyzer
from .prompt_builder import PromptBuilder
from .response_parser import build_issues, parse_issue_payload

if TYPE_CHECKING:
    from openai import AsyncAzureOpenAI, AsyncOpenAI

logger = logging.getLogger(__name__)


class OpenAIAnalyzer(BaseAnalyzer):
    """
    Checks one text layer with a low-temperature chat completion.

    Example:
        >>> analyzer = OpenAIAnalyzer(get_settings())
        >>> result = await analyzer.analyze(TextFragment(id="a", text="Ths is a tst."))
        >>> [issue.suggestion for issue in result.fragment.issues]
        ['This', 'test']
    """

    def __init__(
        self,
        settings: RelaySettings,
        client: "Optional[AsyncOpenAI | AsyncAzureOpenAI]" = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._model = get_model_name(settings.model)
        self._prompt_builder = prompt_builder or PromptBuilder()

    @property
    def client(self) -> "AsyncOpenAI | AsyncAzureOpenAI":
        # Built on first use so a missing credential fails per layer, not at startup.
        if self._client is None:
            self._client = get_client(self._settings)
        return self._client

    def describe_error(self, error: Exception) -> str:
        if isinstance(error, openai.APIStatusError):
            return f"OpenAI API error: {error.status_code} {error.message}"
        return str(error)

    async def find_issues(self, fragment: TextFragment) -> List[Issue]:
        if not fragment.text or not fragment.text.strip():
            return []

        completion = await self.client.chat.completions.create(
            model=self._model,
            messages=self._prompt_builder.build_messages(fragment),
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
        )

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        if not content:
            raise ProviderResponseError("No content received from OpenAI")

        issues = build_issues(fragment, parse_issue_payload(content))
        logger.info(
            'Found %d issues in "%s..."',
            len(issues),
            fragment.text[:50],
        )
        return issues
