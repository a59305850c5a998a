"""
Unit Tests for Operation Instrumentation
"""
import asyncio
from unittest.mock import MagicMock

import pytest

from widerow.instrumentation import OperationStats, TimingInstrumentation, no_instrumentation


class FakeClock:
    """Clock advancing by a fixed step on every read."""

    def __init__(self, step: float = 0.25):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


async def _value(value):
    return value


async def _fail(error):
    raise error


class TestNoInstrumentation:
    """Tests for the default no-op hook."""

    def test_returns_same_awaitable(self):
        coro = _value(1)
        try:
            assert no_instrumentation("fetch_data")(coro) is coro
        finally:
            coro.close()

    @pytest.mark.asyncio
    async def test_value_unchanged(self):
        assert await no_instrumentation("update")(_value("x")) == "x"


class TestOperationStats:
    """Tests for OperationStats."""

    def test_initial_average_is_zero(self):
        assert OperationStats().avg_ms == 0.0

    def test_record_accumulates(self):
        stats = OperationStats()
        stats.record(10.0)
        stats.record(30.0, failed=True)

        assert stats.calls == 2
        assert stats.failures == 1
        assert stats.avg_ms == 20.0
        assert stats.max_ms == 30.0

    def test_to_dict(self):
        stats = OperationStats()
        stats.record(1.23456)

        assert stats.to_dict() == {"calls": 1, "failures": 0, "avg_ms": 1.235, "max_ms": 1.235}


class TestTimingInstrumentation:
    """Tests for TimingInstrumentation."""

    @pytest.mark.asyncio
    async def test_records_duration_from_hook_call(self):
        timing = TimingInstrumentation(clock=FakeClock(step=0.5))

        intercept = timing("fetch_data")
        result = await intercept(_value([1, 2]))

        assert result == [1, 2]
        assert timing.stats["fetch_data"].calls == 1
        assert timing.stats["fetch_data"].total_ms == 500.0

    @pytest.mark.asyncio
    async def test_failure_reraised_and_counted(self):
        timing = TimingInstrumentation(clock=FakeClock())
        error = RuntimeError("boom")

        with pytest.raises(RuntimeError) as exc_info:
            await timing("update")(_fail(error))

        assert exc_info.value is error
        assert timing.stats["update"].failures == 1

    @pytest.mark.asyncio
    async def test_forwards_to_on_record(self):
        on_record = MagicMock()
        timing = TimingInstrumentation(clock=FakeClock(step=0.001), on_record=on_record)

        await timing("update")(_value(None))

        on_record.assert_called_once_with("update", pytest.approx(1.0), False)

    @pytest.mark.asyncio
    async def test_summary_per_operation(self):
        timing = TimingInstrumentation(clock=FakeClock())

        await timing("fetch_data")(_value(1))
        await timing("fetch_data")(_value(2))
        await timing("update")(_value(None))

        summary = timing.summary()
        assert summary["fetch_data"]["calls"] == 2
        assert summary["update"]["calls"] == 1

    @pytest.mark.asyncio
    async def test_wraps_futures(self):
        timing = TimingInstrumentation(clock=FakeClock())
        future = asyncio.get_running_loop().create_future()
        future.set_result("done")

        assert await timing("fetch_data")(future) == "done"

    @pytest.mark.asyncio
    async def test_cancellation_counted_as_failure(self):
        timing = TimingInstrumentation(clock=FakeClock())
        never = asyncio.get_running_loop().create_future()

        task = asyncio.ensure_future(timing("fetch_data")(never))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert timing.stats["fetch_data"].calls == 1
        assert timing.stats["fetch_data"].failures == 1
