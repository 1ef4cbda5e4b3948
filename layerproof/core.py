from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .analysis.analyzer import OpenAIAnalyzer
from .analysis.base import BaseAnalyzer
from .config import RelaySettings, get_settings
from .exceptions import InvalidRequestError
from .filtering import filter_eligible
from .parallel import BatchResult, WaveRunner, reconcile
from .tracking import MlflowLogger
from .types import BatchConfig, CheckStats, TextFragment

logger = logging.getLogger(__name__)


@dataclass
class CheckOutcome:
    layers: List[TextFragment]
    stats: CheckStats
    batch: BatchResult

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "data": [layer.to_dict() for layer in self.layers],
            "stats": self.stats.to_dict(),
        }


def fragments_from_payload(
    payload: Any,
) -> Tuple[List[TextFragment], Dict[str, Any]]:
    """
    Read ``textLayers`` and ``batchConfig`` from a decoded request body.

    Raises:
        InvalidRequestError: If ``textLayers`` is missing or not a list
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("textLayers"), list):
        raise InvalidRequestError("Invalid request: textLayers array required")

    fragments: List[TextFragment] = []
    for index, layer in enumerate(payload["textLayers"]):
        if not isinstance(layer, dict) or "id" not in layer:
            raise InvalidRequestError(
                f"Invalid request: textLayers[{index}] must be an object with an id"
            )
        text = layer.get("text")
        if text is not None and not isinstance(text, str):
            text = str(text)
        extra = {
            key: value
            for key, value in layer.items()
            if key not in ("id", "name", "text", "issues")
        }
        fragments.append(
            TextFragment(
                id=str(layer["id"]),
                name=layer.get("name"),
                text=text,
                extra=extra,
            )
        )

    batch_config = payload.get("batchConfig") or {}
    if not isinstance(batch_config, dict):
        raise InvalidRequestError("Invalid request: batchConfig must be an object")
    return fragments, batch_config


class LayerProof:
    """
    High-level grammar-check orchestrator.

    Pipeline:
        text layers -> eligibility filter -> wave runner -> reconciler -> stats
    """

    def __init__(
        self,
        settings: Optional[RelaySettings] = None,
        analyzer: Optional[BaseAnalyzer] = None,
        tracker: Optional[MlflowLogger] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._analyzer = analyzer or OpenAIAnalyzer(self._settings)
        self._tracker = tracker or MlflowLogger()

    @property
    def settings(self) -> RelaySettings:
        return self._settings

    def batch_config(
        self,
        concurrency: Optional[int] = None,
        delay: Optional[int] = None,
    ) -> BatchConfig:
        return BatchConfig.from_request(
            concurrency,
            delay,
            default_concurrency=self._settings.default_concurrency,
            default_delay_ms=self._settings.default_delay_ms,
        )

    async def check(
        self,
        layers: List[TextFragment],
        batch_config: Optional[BatchConfig] = None,
    ) -> CheckOutcome:
        batch_config = batch_config or self.batch_config()
        logger.info("Processing %d text layers", len(layers))

        eligible = filter_eligible(layers)
        if not eligible:
            logger.info("No valid text content to process")

        runner = WaveRunner(
            self._analyzer,
            concurrency=batch_config.concurrency,
            delay_ms=batch_config.delay_ms,
        )
        batch = await runner.run(eligible)
        final_layers = reconcile(layers, batch.results)

        stats = CheckStats(
            total_layers=len(layers),
            processed_layers=len(eligible),
            total_issues=sum(len(layer.issues) for layer in final_layers),
        )
        logger.info(
            "Completed processing: %d total issues found", stats.total_issues
        )

        # MLflow calls are blocking network I/O.
        await asyncio.to_thread(
            self._tracker.log_check_summary,
            {
                **stats.to_dict(),
                "groups": batch.group_sizes,
                "failedLayers": batch.failed_ids,
                "totalTimeMs": batch.total_time_ms,
            },
        )
        return CheckOutcome(layers=final_layers, stats=stats, batch=batch)
