from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..types import TextFragment

SYSTEM_PROMPT = """You are a professional grammar and spell checker. Analyze the following single text for ALL grammar, spelling, and punctuation errors.

CRITICAL REQUIREMENTS:
- Find EVERY spelling mistake, no matter how obvious (e.g., "Dsh" should be "Dash", "chking" should be "checking")
- Find EVERY grammar error (subject-verb agreement, tense errors, etc.)
- Find EVERY punctuation error (missing commas, periods, apostrophes, capitalization)
- DO NOT flag style issues - only real grammar, spelling, and punctuation mistakes
- Even simple typos MUST be detected and reported
- Be thorough and consistent

Return valid JSON in this exact format:
{
  "issues": [
    {
      "originalText": "full original text",
      "issueText": "the problematic word/phrase",
      "suggestion": "corrected version",
      "type": "grammar|spelling|punctuation",
      "confidence": 0.9,
      "position": {
        "start": 0,
        "end": 5
      }
    }
  ]
}

IMPORTANT:
- Return empty array ONLY if text is genuinely perfect
- NEVER use placeholder corrections like "(corrected)" or "[fixed]"
- Be precise with character positions (0-indexed)
- Suggestions must be real words, not placeholders"""


@dataclass
class PromptBuilder:
    """
    Build the chat messages for checking a single text layer.
    """

    system_prompt: str = SYSTEM_PROMPT

    def user_prompt(self, fragment: TextFragment) -> str:
        return (
            "Analyze this text for grammar, spelling, and punctuation errors: "
            f'"{fragment.text}"'
        )

    def build_messages(self, fragment: TextFragment) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt(fragment)},
        ]
