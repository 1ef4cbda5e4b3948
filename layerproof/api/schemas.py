from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from layerproof.types import TextFragment

# --- Request schemas ---


class TextLayerIn(BaseModel):
    """One text layer as sent by the client; unknown keys are kept."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: str | None = None
    text: str | None = None
    issues: list[Any] = Field(default_factory=list)

    def to_fragment(self) -> TextFragment:
        return TextFragment(
            id=self.id,
            name=self.name,
            text=self.text,
            extra=dict(self.model_extra or {}),
        )


class BatchConfigIn(BaseModel):
    concurrency: int | None = None
    delay: int | None = None


class GrammarCheckRequest(BaseModel):
    """POST /api/grammar-check body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text_layers: list[TextLayerIn]
    batch_config: BatchConfigIn | None = None


# --- Response schemas ---


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PositionOut(BaseModel):
    start: int
    end: int


class IssueOut(_CamelModel):
    id: str
    layer_id: str
    layer_name: str | None = None
    original_text: str
    issue_text: str
    suggestion: str
    type: str
    confidence: float
    position: PositionOut
    status: str


class TextLayerOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    text: str | None = None
    issues: list[IssueOut]


class StatsOut(_CamelModel):
    total_layers: int
    processed_layers: int
    total_issues: int


class GrammarCheckResponse(BaseModel):
    success: bool = True
    data: list[TextLayerOut]
    stats: StatsOut


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
