"""
Parse and sanitize provider output into ``Issue`` objects.

The provider is asked for ``{"issues": [...]}`` but may wrap it in a
markdown code fence. Entries that are style feedback, placeholders, or
no-op corrections are dropped before ids are assigned.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List

from ..exceptions import ProviderResponseError
from ..types import DEFAULT_CONFIDENCE, ISSUE_TYPES, Issue, Position, TextFragment

logger = logging.getLogger(__name__)

# Case-sensitive substrings that mark a suggestion as a placeholder.
PLACEHOLDER_MARKERS = (
    "(mock correction)",
    "(corrected)",
    "[correction]",
    "placeholder",
    "mock",
)

_FENCE_RE = re.compile(r"```(?:json)?\n?", re.IGNORECASE)


def strip_code_fences(content: str) -> str:
    """Remove markdown code-fence markup around a JSON payload."""
    return _FENCE_RE.sub("", content).strip()


def parse_issue_payload(content: str) -> List[Dict[str, Any]]:
    """
    Parse the provider's message content into raw issue dicts.

    Raises:
        ProviderResponseError: If the content is not JSON of shape
            ``{"issues": [...]}``
    """
    text = strip_code_fences(content)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProviderResponseError(f"Invalid JSON response from provider: {exc}") from exc

    if not isinstance(payload, dict):
        raise ProviderResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    issues = payload.get("issues") or []
    if not isinstance(issues, list):
        raise ProviderResponseError(
            f"Expected 'issues' to be a list, got {type(issues).__name__}"
        )
    return [entry for entry in issues if isinstance(entry, dict)]


def is_placeholder(suggestion: str) -> bool:
    return any(marker in suggestion for marker in PLACEHOLDER_MARKERS)


def is_reportable(entry: Dict[str, Any]) -> bool:
    issue_type = str(entry.get("type") or "").strip().lower()
    if issue_type not in ISSUE_TYPES:
        return False

    suggestion = entry.get("suggestion")
    issue_text = entry.get("issueText")
    if not isinstance(suggestion, str) or not isinstance(issue_text, str):
        return False
    if is_placeholder(suggestion):
        return False
    if suggestion == issue_text:
        return False
    return True


def _confidence(raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        return DEFAULT_CONFIDENCE
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, value))


def _position(raw: Any, issue_text: str) -> Position:
    if isinstance(raw, dict):
        try:
            return Position(start=int(raw["start"]), end=int(raw["end"]))
        except (KeyError, TypeError, ValueError, OverflowError):
            pass
    # Not necessarily the offset within the fragment text.
    return Position(start=0, end=len(issue_text))


def build_issues(fragment: TextFragment, entries: List[Dict[str, Any]]) -> List[Issue]:
    """Filter raw entries and convert the survivors into numbered issues."""
    kept = [entry for entry in entries if is_reportable(entry)]
    dropped = len(entries) - len(kept)
    if dropped:
        logger.debug("Dropped %d unusable issue(s) for layer %s", dropped, fragment.id)

    issues: List[Issue] = []
    for ordinal, entry in enumerate(kept):
        issue_text = entry["issueText"]
        original_text = entry.get("originalText")
        if not isinstance(original_text, str) or not original_text:
            original_text = fragment.text or ""
        issues.append(
            Issue(
                id=f"{fragment.id}-{ordinal}",
                layer_id=fragment.id,
                layer_name=fragment.name,
                original_text=original_text,
                issue_text=issue_text,
                suggestion=entry["suggestion"],
                type=str(entry["type"]).strip().lower(),
                confidence=_confidence(entry.get("confidence")),
                position=_position(entry.get("position"), issue_text),
            )
        )
    return issues
