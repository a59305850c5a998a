"""
Operation Instrumentation
Hooks that wrap driver operations for timing and metrics.

An instrumentation is called with the operation name when the operation
starts and returns a transform over the operation's awaitable. The
transform must resolve to the same value, or raise the same error, as the
awaitable it wraps.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Transform = Callable[[Awaitable[T]], Awaitable[T]]
Instrumentation = Callable[[str], Transform]


def _identity(awaitable: Awaitable[T]) -> Awaitable[T]:
    return awaitable


def no_instrumentation(method_name: str) -> Transform:
    """Default hook: leaves the awaitable untouched."""
    return _identity


@dataclass
class OperationStats:
    """Tracks timing statistics for one operation name."""
    calls: int = 0
    failures: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def record(self, duration_ms: float, failed: bool = False) -> None:
        self.calls += 1
        if failed:
            self.failures += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)

    @property
    def avg_ms(self) -> float:
        """Mean duration in milliseconds."""
        if self.calls == 0:
            return 0.0
        return self.total_ms / self.calls

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calls": self.calls,
            "failures": self.failures,
            "avg_ms": round(self.avg_ms, 3),
            "max_ms": round(self.max_ms, 3),
        }


class TimingInstrumentation:
    """
    Records wall-clock duration of every wrapped operation.

    Timing starts when the hook is invoked for an operation and stops when
    its awaitable settles, successfully or not.

    Example:
        timing = TimingInstrumentation()
        driver = WideRowDriver(model, instrument=timing)
        ...
        timing.summary()  # {"fetch_data": {"calls": 3, ...}}
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        on_record: Optional[Callable[[str, float, bool], None]] = None
    ):
        """
        Initialize timing instrumentation.

        Args:
            clock: Monotonic clock returning seconds
            on_record: Optional callback(method_name, duration_ms, failed)
                for forwarding to an external metrics system
        """
        self._clock = clock
        self._on_record = on_record
        self.stats: Dict[str, OperationStats] = {}

    def __call__(self, method_name: str) -> Transform:
        start = self._clock()

        def intercept(awaitable: Awaitable[T]) -> Awaitable[T]:
            return self._timed(method_name, start, awaitable)

        return intercept

    async def _timed(self, method_name: str, start: float, awaitable: Awaitable[T]) -> T:
        failed = False
        try:
            return await awaitable
        except BaseException:
            failed = True
            raise
        finally:
            self.record(method_name, (self._clock() - start) * 1000, failed)

    def record(self, method_name: str, duration_ms: float, failed: bool = False) -> None:
        """Record one completed operation."""
        self.stats.setdefault(method_name, OperationStats()).record(duration_ms, failed)
        logger.debug(
            f"{method_name} {'failed' if failed else 'completed'} in {duration_ms:.2f} ms"
        )
        if self._on_record is not None:
            self._on_record(method_name, duration_ms, failed)

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Get statistics for all recorded operations."""
        return {name: stats.to_dict() for name, stats in self.stats.items()}
