"""
LayerProof Parallel Processing Module.

Key Components:
    - WaveRunner: Checks layers in fixed-size concurrent groups with a pause between groups
    - reconcile: Maps runner output back onto the original request order

Example:
    >>> from layerproof.parallel import WaveRunner, reconcile
    >>> runner = WaveRunner(analyzer, concurrency=4, delay_ms=200)
    >>> batch = await runner.run(eligible_layers)
    >>> layers = reconcile(all_layers, batch.results)
"""

from .reconciler import reconcile
from .runner import BatchResult, WaveRunner, WaveRunnerConfig

__all__ = [
    "WaveRunner",
    "WaveRunnerConfig",
    "BatchResult",
    "reconcile",
]
