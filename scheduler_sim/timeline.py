from __future__ import annotations

from typing import List, Optional

from .models import Interval


class TimelineBuilder:
    """
    Append-only timeline that owns the simulation clock.

    Every interval starts where the previous one ended, so the finished
    timeline always covers ``[0, clock)`` without gaps. Adjacent intervals
    for the same process are kept separate; coalescing is a display concern.
    """

    def __init__(self) -> None:
        self._clock = 0
        self._intervals: List[Interval] = []

    @property
    def clock(self) -> int:
        return self._clock

    @property
    def intervals(self) -> List[Interval]:
        return list(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def execute(self, pid: int, ticks: int) -> Interval:
        if ticks <= 0:
            raise ValueError(f"execution slice must be positive, got {ticks}")
        interval = Interval(start=self._clock, end=self._clock + ticks, pid=pid)
        self._intervals.append(interval)
        self._clock = interval.end
        return interval

    def idle_until(self, tick: int) -> Optional[Interval]:
        if tick < self._clock:
            raise ValueError(f"cannot idle back to {tick}; clock is already at {self._clock}")
        if tick == self._clock:
            return None
        interval = Interval(start=self._clock, end=tick)
        self._intervals.append(interval)
        self._clock = tick
        return interval
