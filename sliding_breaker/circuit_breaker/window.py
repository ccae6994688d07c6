"""
Sliding Window
==============
Bounded record of recent call outcomes with O(1) rate computation.

The window keeps running failure and slow counters next to the deque of
outcomes, so rates never require a scan. Stale outcomes are removed by a
pruning strategy chosen from the configured SlidingWindowType.

The window is not synchronized; its owner must serialize access.
"""

from collections import deque
from typing import Deque, Dict, Iterator

from .models import CallOutcome, SlidingWindowType


class WindowPruner:
    """Removes stale outcomes from the front of a window."""

    def prune(self, window: "SlidingWindow", now: float) -> None:
        raise NotImplementedError


class CountBasedPruner(WindowPruner):
    """
    Keeps at most `size` outcomes.

    Runs before insertion, so the oldest entries are dropped while the
    window is at or above capacity and the new entry fits afterwards.
    """

    def __init__(self, size: int):
        self.size = int(size)

    def prune(self, window: "SlidingWindow", now: float) -> None:
        while window.length and window.length >= self.size:
            window.pop_oldest()


class TimeBasedPruner(WindowPruner):
    """Drops outcomes observed at or before `now - duration`."""

    def __init__(self, duration: float):
        self.duration = float(duration)

    def prune(self, window: "SlidingWindow", now: float) -> None:
        expires_at = now - self.duration
        while window.length:
            if window.oldest().observed_at > expires_at:
                break
            window.pop_oldest()


_PRUNERS: Dict[SlidingWindowType, type] = {
    SlidingWindowType.COUNT_BASED: CountBasedPruner,
    SlidingWindowType.TIME_BASED: TimeBasedPruner,
}


def create_pruner(window_type: SlidingWindowType, size: float) -> WindowPruner:
    """Build the pruning strategy for a window type."""
    return _PRUNERS[SlidingWindowType(window_type)](size)


class SlidingWindow:
    """
    Insertion-ordered outcomes, oldest first.

    Example:
        window = SlidingWindow(CountBasedPruner(10))
        window.record(failed=True, slow=False, now=clock())
        window.failure_rate  # 100.0
    """

    def __init__(self, pruner: WindowPruner):
        self.pruner = pruner
        self._outcomes: Deque[CallOutcome] = deque()
        self._failure_count = 0
        self._slow_count = 0

    @property
    def length(self) -> int:
        return len(self._outcomes)

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def slow_count(self) -> int:
        """Slow calls that did not also fail."""
        return self._slow_count

    @property
    def failure_rate(self) -> float:
        """Failed calls as a percentage of the window, 0 when empty."""
        if not self._outcomes:
            return 0.0
        return self._failure_count * 100 / len(self._outcomes)

    @property
    def slow_call_rate(self) -> float:
        """Slow, non-failed calls as a percentage of the window, 0 when empty."""
        if not self._outcomes:
            return 0.0
        return self._slow_count * 100 / len(self._outcomes)

    def prune(self, now: float) -> None:
        self.pruner.prune(self, now)

    def record(self, failed: bool, slow: bool, now: float) -> CallOutcome:
        """Prune stale entries, then append a new outcome."""
        self.prune(now)

        outcome = CallOutcome(failed=failed, slow=slow, observed_at=now)
        self._outcomes.append(outcome)
        if outcome.failed:
            self._failure_count += 1
        elif outcome.counts_as_slow:
            self._slow_count += 1
        return outcome

    def oldest(self) -> CallOutcome:
        return self._outcomes[0]

    def pop_oldest(self) -> CallOutcome:
        outcome = self._outcomes.popleft()
        if outcome.failed:
            self._failure_count -= 1
        elif outcome.counts_as_slow:
            self._slow_count -= 1
        return outcome

    def clear(self) -> None:
        self._outcomes.clear()
        self._failure_count = 0
        self._slow_count = 0

    def __iter__(self) -> Iterator[CallOutcome]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)
