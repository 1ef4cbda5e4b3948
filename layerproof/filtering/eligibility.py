"""Decide which text layers are worth sending to the provider."""

from __future__ import annotations

import re
from typing import List, Optional

from ..types import TextFragment

MIN_TEXT_LENGTH = 2

# Digits, whitespace and common punctuation only: nothing to proofread.
_NON_LINGUISTIC_RE = re.compile(r"[\d\s\-_.,!@#$%^&*()+=\[\]{}|\\:\";'<>?/`~]*")


def is_valid_for_checking(text: Optional[str]) -> bool:
    if not text or not text.strip():
        return False
    if len(text) < MIN_TEXT_LENGTH:
        return False
    if _NON_LINGUISTIC_RE.fullmatch(text):
        return False
    return True


def filter_eligible(fragments: List[TextFragment]) -> List[TextFragment]:
    """Return the fragments eligible for remote analysis, in input order."""
    return [fragment for fragment in fragments if is_valid_for_checking(fragment.text)]
