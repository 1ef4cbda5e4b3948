"""LayerProof: batched grammar checking for design text layers."""

from .core import CheckOutcome, LayerProof, fragments_from_payload
from .types import BatchConfig, CheckStats, Issue, Position, TextFragment

__all__ = [
    "LayerProof",
    "CheckOutcome",
    "fragments_from_payload",
    "BatchConfig",
    "CheckStats",
    "Issue",
    "Position",
    "TextFragment",
]

__version__ = "0.1.0"
