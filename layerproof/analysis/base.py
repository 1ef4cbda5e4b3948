from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import List

from ..types import FragmentResult, Issue, TextFragment

logger = logging.getLogger(__name__)


class BaseAnalyzer(ABC):
    """
    Checks one text layer at a time.

    ``analyze`` never raises: any failure inside ``find_issues`` becomes a
    failed ``FragmentResult`` whose fragment carries an empty issue list.
    """

    @abstractmethod
    async def find_issues(self, fragment: TextFragment) -> List[Issue]:
        raise NotImplementedError

    def describe_error(self, error: Exception) -> str:
        return str(error)

    async def analyze(self, fragment: TextFragment) -> FragmentResult:
        start_time = time.time()
        try:
            issues = await self.find_issues(fragment)
        except Exception as e:
            latency_ms = (time.time() - start_time) * 1000
            message = self.describe_error(e)
            logger.error(
                "Processing failed for layer %s: %s",
                fragment.id,
                message[:200],
            )
            return FragmentResult(
                fragment_id=fragment.id,
                fragment=fragment.with_issues([]),
                error=message,
                latency_ms=latency_ms,
                success=False,
            )

        latency_ms = (time.time() - start_time) * 1000
        return FragmentResult(
            fragment_id=fragment.id,
            fragment=fragment.with_issues(issues),
            error=None,
            latency_ms=latency_ms,
            success=True,
        )
