from __future__ import annotations

import contextlib
import logging
import os
import uuid
from typing import Any, Dict, Iterator

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes")

# Summary keys recorded as MLflow metrics; the full summary goes to an artifact.
_METRIC_KEYS = ("totalLayers", "processedLayers", "totalIssues", "totalTimeMs")


class MlflowLogger:
    """
    Records one summary per grammar-check request in MLflow.

    Off unless LAYERPROOF_ENABLE_MLFLOW is set and the mlflow package can be
    imported; every method is a no-op while disabled.
    """

    def __init__(self) -> None:
        self._mlflow = None
        self._run_name = os.getenv("LAYERPROOF_MLFLOW_RUN_NAME", "layerproof")
        if os.getenv("LAYERPROOF_ENABLE_MLFLOW", "0").lower() in _TRUTHY:
            try:
                import mlflow  # type: ignore
            except ImportError:
                logger.warning("LAYERPROOF_ENABLE_MLFLOW is set but mlflow is not installed")
            else:
                self._mlflow = mlflow

    @property
    def enabled(self) -> bool:
        return self._mlflow is not None

    def log_check_summary(self, summary: Dict[str, Any]) -> None:
        if self._mlflow is None:
            return
        metrics = {
            key: float(summary[key])
            for key in _METRIC_KEYS
            if isinstance(summary.get(key), (int, float))
        }
        try:
            with self._run():
                if metrics:
                    self._mlflow.log_metrics(metrics)
                self._mlflow.log_dict(summary, f"checks/summary_{uuid.uuid4().hex}.json")
        except Exception as e:
            # The check already succeeded; tracking must not change its response.
            logger.warning("Failed to log check summary to MLflow: %s", e)

    @contextlib.contextmanager
    def _run(self) -> Iterator[None]:
        assert self._mlflow is not None
        if self._mlflow.active_run():
            yield
            return
        with self._mlflow.start_run(run_name=self._run_name):
            yield
