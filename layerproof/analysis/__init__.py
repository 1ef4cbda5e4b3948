from .analyzer import OpenAIAnalyzer
from .base import BaseAnalyzer
from .prompt_builder import PromptBuilder
from .response_parser import PLACEHOLDER_MARKERS, build_issues, parse_issue_payload

__all__ = [
    "OpenAIAnalyzer",
    "BaseAnalyzer",
    "PromptBuilder",
    "PLACEHOLDER_MARKERS",
    "build_issues",
    "parse_issue_payload",
]
