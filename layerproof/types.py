from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ISSUE_TYPES = ("spelling", "grammar", "punctuation")
DEFAULT_CONFIDENCE = 0.9
DEFAULT_CONCURRENCY = 4
DEFAULT_DELAY_MS = 200


@dataclass
class Position:
    start: int
    end: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass
class Issue:
    """
    A single flagged defect with its proposed correction.

    ``layer_id``/``layer_name`` point back at the owning text layer for
    lookup only.
    """

    id: str
    layer_id: str
    layer_name: Optional[str]
    original_text: str
    issue_text: str
    suggestion: str
    type: str
    confidence: float = DEFAULT_CONFIDENCE
    position: Position = field(default_factory=lambda: Position(0, 0))
    status: str = "pending"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "layerId": self.layer_id,
            "layerName": self.layer_name,
            "originalText": self.original_text,
            "issueText": self.issue_text,
            "suggestion": self.suggestion,
            "type": self.type,
            "confidence": self.confidence,
            "position": self.position.to_dict(),
            "status": self.status,
        }


@dataclass
class TextFragment:
    """
    One text layer submitted for checking.

    Keys the client sent beyond the known ones are kept in ``extra`` and
    written back unchanged.
    """

    id: str
    name: Optional[str] = None
    text: Optional[str] = None
    issues: List[Issue] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_issues(self, issues: List[Issue]) -> "TextFragment":
        return TextFragment(
            id=self.id,
            name=self.name,
            text=self.text,
            issues=list(issues),
            extra=dict(self.extra),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "name": self.name,
                "text": self.text,
                "issues": [issue.to_dict() for issue in self.issues],
            }
        )
        return data


@dataclass
class FragmentResult:
    """Outcome of analysing one fragment.

    Attributes:
        fragment_id: Identifier of the analysed fragment
        fragment: Fragment with its issue list attached (empty on failure)
        error: Error message (if failed)
        latency_ms: Time spent on the provider round trip
        success: Whether analysis succeeded
    """

    fragment_id: str
    fragment: TextFragment
    error: Optional[str]
    latency_ms: float
    success: bool


@dataclass
class BatchConfig:
    concurrency: int = DEFAULT_CONCURRENCY
    delay_ms: int = DEFAULT_DELAY_MS

    @classmethod
    def from_request(
        cls,
        concurrency: Optional[int] = None,
        delay: Optional[int] = None,
        default_concurrency: int = DEFAULT_CONCURRENCY,
        default_delay_ms: int = DEFAULT_DELAY_MS,
    ) -> "BatchConfig":
        if concurrency is None or concurrency < 1:
            concurrency = default_concurrency
        if delay is None or delay < 0:
            delay = default_delay_ms
        return cls(concurrency=int(concurrency), delay_ms=int(delay))


@dataclass
class CheckStats:
    total_layers: int
    processed_layers: int
    total_issues: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalLayers": self.total_layers,
            "processedLayers": self.processed_layers,
            "totalIssues": self.total_issues,
        }
