"""Shared test doubles for the LayerProof test suite."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional, Tuple

from layerproof.analysis.base import BaseAnalyzer
from layerproof.types import Issue, Position, TextFragment

TEST_API_KEY = "sk-test-secret-key"

# (issueText, suggestion, type)
IssueSpec = Tuple[str, str, str]


def make_completion(content: Optional[str]) -> SimpleNamespace:
    """Shape of an OpenAI chat completion, as far as the analyzer reads it."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def make_layers(*texts: str, prefix: str = "layer") -> List[TextFragment]:
    return [
        TextFragment(id=f"{prefix}{i}", name=f"Layer {i}", text=text)
        for i, text in enumerate(texts)
    ]


class ScriptedAnalyzer(BaseAnalyzer):
    """
    Analyzer with canned answers per layer id.

    Layers listed in ``failing`` raise inside ``find_issues``; ``delays``
    holds per-layer sleep times in seconds. Start/end events are recorded so
    tests can check how calls overlapped.
    """

    def __init__(
        self,
        issues_by_id: Optional[Dict[str, List[IssueSpec]]] = None,
        failing: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.issues_by_id = issues_by_id or {}
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls: List[str] = []
        self.events: List[str] = []
        self.active = 0
        self.max_active = 0

    async def find_issues(self, fragment: TextFragment) -> List[Issue]:
        self.calls.append(fragment.id)
        self.events.append(f"start:{fragment.id}")
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(fragment.id, 0))
            if fragment.id in self.failing:
                raise RuntimeError(f"OpenAI API error: 502 for {fragment.id}")
            return [
                Issue(
                    id=f"{fragment.id}-{ordinal}",
                    layer_id=fragment.id,
                    layer_name=fragment.name,
                    original_text=fragment.text or "",
                    issue_text=issue_text,
                    suggestion=suggestion,
                    type=issue_type,
                    position=Position(0, len(issue_text)),
                )
                for ordinal, (issue_text, suggestion, issue_type) in enumerate(
                    self.issues_by_id.get(fragment.id, [])
                )
            ]
        finally:
            self.active -= 1
            self.events.append(f"end:{fragment.id}")
