"""
Wave Runner for LayerProof.

Checks text layers in fixed-size groups ("waves"): every layer in a group
is analysed concurrently, the whole group is awaited, and a fixed pause is
inserted before the next group starts.

Architecture:
    - Request-level parallelism within a group only
    - Groups run strictly one after another
    - No retries and no early termination on failure
    - Results keep the input order (group order, then position in group)
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Iterator, List

from ..analysis.base import BaseAnalyzer
from ..types import DEFAULT_CONCURRENCY, DEFAULT_DELAY_MS, FragmentResult, TextFragment

logger = logging.getLogger(__name__)


@dataclass
class WaveRunnerConfig:
    """Configuration for the wave runner.

    Attributes:
        concurrency: Maximum layers analysed at once (group size)
        delay_ms: Pause between consecutive groups in milliseconds
    """

    concurrency: int = DEFAULT_CONCURRENCY
    delay_ms: int = DEFAULT_DELAY_MS


@dataclass
class BatchResult:
    """Aggregated result from one run.

    Attributes:
        results: Per-layer results in input order
        total_time_ms: Total wall-clock time
        group_sizes: Size of each group, in scheduling order
        success_count: Number of layers analysed successfully
        failure_count: Number of layers that degraded to no issues
    """

    results: List[FragmentResult]
    total_time_ms: float
    group_sizes: List[int]
    success_count: int
    failure_count: int

    @property
    def group_count(self) -> int:
        return len(self.group_sizes)

    @property
    def failed_ids(self) -> List[str]:
        return [r.fragment_id for r in self.results if not r.success]


class WaveRunner:
    """
    Group-by-group concurrent checker.

    Example:
        >>> runner = WaveRunner(analyzer, concurrency=4, delay_ms=200)
        >>> batch = await runner.run(layers)
        >>> batch.group_sizes
        [4, 4, 2]
    """

    def __init__(
        self,
        analyzer: BaseAnalyzer,
        concurrency: int = DEFAULT_CONCURRENCY,
        delay_ms: int = DEFAULT_DELAY_MS,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        if delay_ms < 0:
            raise ValueError(f"delay_ms must not be negative, got {delay_ms}")

        self._analyzer = analyzer
        self._config = WaveRunnerConfig(concurrency=concurrency, delay_ms=delay_ms)

    @property
    def config(self) -> WaveRunnerConfig:
        """Get current configuration."""
        return self._config

    def _chunk(self, fragments: List[TextFragment]) -> Iterator[List[TextFragment]]:
        size = self._config.concurrency
        for i in range(0, len(fragments), size):
            yield fragments[i : i + size]

    async def _pause(self) -> None:
        await asyncio.sleep(self._config.delay_ms / 1000)

    async def _run_group(self, group: List[TextFragment]) -> List[FragmentResult]:
        return list(
            await asyncio.gather(*(self._analyzer.analyze(fragment) for fragment in group))
        )

    async def run(self, fragments: List[TextFragment]) -> BatchResult:
        """
        Analyse all layers group by group.

        Args:
            fragments: Eligible layers, in the order results should come back

        Returns:
            BatchResult whose ``results`` line up with ``fragments``
        """
        start_time = time.time()
        groups = list(self._chunk(fragments))
        results: List[FragmentResult] = []

        for group_idx, group in enumerate(groups):
            logger.info(
                "Processing group %d/%d (%d layers)",
                group_idx + 1,
                len(groups),
                len(group),
            )
            results.extend(await self._run_group(group))

            if group_idx < len(groups) - 1:
                await self._pause()

        total_time_ms = (time.time() - start_time) * 1000
        success_count = sum(1 for r in results if r.success)
        failure_count = len(results) - success_count

        if groups:
            logger.info(
                "Batch complete: %d/%d success in %d groups, %.1fs total",
                success_count,
                len(results),
                len(groups),
                total_time_ms / 1000,
            )

        return BatchResult(
            results=results,
            total_time_ms=total_time_ms,
            group_sizes=[len(group) for group in groups],
            success_count=success_count,
            failure_count=failure_count,
        )
