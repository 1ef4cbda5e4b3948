"""
Unit tests for the LayerProof wave runner and reconciler.

Tests the group scheduling including:
- Fixed-size grouping and pauses between groups
- Whole-group barriers (no cross-group concurrency)
- Order preservation independent of completion order
- Per-layer failure isolation
"""

from __future__ import annotations

import time
from unittest.mock import AsyncMock, patch

import pytest

from helpers import ScriptedAnalyzer, make_layers
from layerproof.parallel import WaveRunner, WaveRunnerConfig, reconcile
from layerproof.types import FragmentResult, TextFragment


class TestWaveRunnerConfig:
    """Tests for WaveRunnerConfig."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = WaveRunnerConfig()
        assert config.concurrency == 4
        assert config.delay_ms == 200

    def test_runner_rejects_bad_config(self) -> None:
        analyzer = ScriptedAnalyzer()
        with pytest.raises(ValueError):
            WaveRunner(analyzer, concurrency=0)
        with pytest.raises(ValueError):
            WaveRunner(analyzer, delay_ms=-1)


class TestWaveRunnerScheduling:
    """Tests for how layers are split into groups."""

    @pytest.mark.asyncio
    async def test_ten_layers_in_three_groups(self) -> None:
        """10 layers at concurrency 4 run as 4, 4, 2 with two pauses."""
        layers = make_layers(*[f"Helo {i}" for i in range(10)])
        runner = WaveRunner(ScriptedAnalyzer(), concurrency=4, delay_ms=200)

        with patch.object(WaveRunner, "_pause", new_callable=AsyncMock) as pause:
            batch = await runner.run(layers)

        assert batch.group_sizes == [4, 4, 2]
        assert batch.group_count == 3
        assert pause.await_count == 2

    @pytest.mark.asyncio
    async def test_single_group_never_pauses(self) -> None:
        runner = WaveRunner(ScriptedAnalyzer(), concurrency=4)

        with patch.object(WaveRunner, "_pause", new_callable=AsyncMock) as pause:
            batch = await runner.run(make_layers("one", "two", "three"))

        assert batch.group_sizes == [3]
        pause.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_input(self) -> None:
        analyzer = ScriptedAnalyzer()
        runner = WaveRunner(analyzer)

        with patch.object(WaveRunner, "_pause", new_callable=AsyncMock) as pause:
            batch = await runner.run([])

        assert batch.results == []
        assert batch.group_sizes == []
        assert batch.success_count == 0
        assert batch.failure_count == 0
        assert analyzer.calls == []
        pause.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pause_is_real_delay(self) -> None:
        """Two groups with a 50ms pacing delay take at least 50ms."""
        runner = WaveRunner(ScriptedAnalyzer(), concurrency=1, delay_ms=50)

        start = time.time()
        await runner.run(make_layers("one", "two"))
        elapsed = time.time() - start

        assert elapsed >= 0.045

    @pytest.mark.asyncio
    async def test_concurrency_within_group_only(self) -> None:
        analyzer = ScriptedAnalyzer(delays={"layer0": 0.05, "layer1": 0.01})
        runner = WaveRunner(analyzer, concurrency=2, delay_ms=0)

        await runner.run(make_layers("one", "two", "three", "four", "five"))

        assert analyzer.max_active == 2
        # The slow first layer holds back the whole next group.
        assert analyzer.events.index("start:layer2") > analyzer.events.index("end:layer0")
        assert analyzer.events.index("start:layer4") > analyzer.events.index("end:layer3")


class TestWaveRunnerResults:
    """Tests for ordering and failure isolation."""

    @pytest.mark.asyncio
    async def test_results_follow_input_order(self) -> None:
        # Later layers finish first.
        analyzer = ScriptedAnalyzer(
            delays={"layer0": 0.04, "layer1": 0.02, "layer2": 0.0}
        )
        runner = WaveRunner(analyzer, concurrency=3, delay_ms=0)

        batch = await runner.run(make_layers("one", "two", "three"))

        assert analyzer.events[3] == "end:layer2"
        assert [r.fragment_id for r in batch.results] == ["layer0", "layer1", "layer2"]

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_siblings(self) -> None:
        analyzer = ScriptedAnalyzer(
            issues_by_id={
                "layer0": [("Helo", "Hello", "spelling")],
                "layer2": [("wrld", "world", "spelling")],
                "layer4": [("teh", "the", "spelling")],
            },
            failing={"layer1"},
        )
        runner = WaveRunner(analyzer, concurrency=2, delay_ms=0)

        batch = await runner.run(make_layers("Helo", "boom", "wrld", "fine", "teh"))

        assert analyzer.calls == ["layer0", "layer1", "layer2", "layer3", "layer4"]
        assert batch.success_count == 4
        assert batch.failure_count == 1
        assert batch.failed_ids == ["layer1"]

        failed = batch.results[1]
        assert not failed.success
        assert failed.fragment.issues == []
        assert "502" in (failed.error or "")

        assert [len(r.fragment.issues) for r in batch.results] == [1, 0, 1, 0, 1]

    @pytest.mark.asyncio
    async def test_all_failures_still_return_every_layer(self) -> None:
        layers = make_layers("one", "two", "three")
        analyzer = ScriptedAnalyzer(failing={layer.id for layer in layers})

        batch = await WaveRunner(analyzer, concurrency=2, delay_ms=0).run(layers)

        assert len(batch.results) == 3
        assert batch.success_count == 0
        assert all(r.fragment.issues == [] for r in batch.results)


def _result(fragment: TextFragment, success: bool = True) -> FragmentResult:
    return FragmentResult(
        fragment_id=fragment.id,
        fragment=fragment,
        error=None if success else "failed",
        latency_ms=1.0,
        success=success,
    )


class TestReconcile:
    """Tests for mapping results back onto the full request."""

    def test_restores_original_order_and_length(self) -> None:
        original = make_layers("Helo", "42", "", "wrld")
        checked_0 = original[0].with_issues([])
        checked_3 = original[3].with_issues([])

        reconciled = reconcile(original, [_result(checked_3), _result(checked_0)])

        assert [layer.id for layer in reconciled] == [layer.id for layer in original]
        assert reconciled[0] is checked_0
        assert reconciled[3] is checked_3

    def test_missing_results_get_empty_issues(self) -> None:
        original = make_layers("42", "   ")
        reconciled = reconcile(original, [])

        assert [layer.issues for layer in reconciled] == [[], []]
        assert [layer.text for layer in reconciled] == ["42", "   "]

    def test_first_match_wins_for_duplicate_ids(self) -> None:
        first = TextFragment(id="dup", text="first")
        second = TextFragment(id="dup", text="second")

        reconciled = reconcile([first, second], [_result(first), _result(second)])

        assert [layer.text for layer in reconciled] == ["first", "first"]

    def test_does_not_share_issue_lists_with_input(self) -> None:
        original = [TextFragment(id="x", text="42")]
        reconciled = reconcile(original, [])
        reconciled[0].issues.append("sentinel")  # type: ignore[arg-type]
        assert original[0].issues == []
