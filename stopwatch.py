# stopwatch.py
import time
from typing import Callable, Optional, Protocol


def format_mmss(minutes: int, seconds: int) -> str:
    return f"{max(0, minutes):02d}:{max(0, seconds):02d}"


class Timer(Protocol):
    """What the quiz session needs from a clock: commands plus a reading."""

    def start(self) -> None: ...

    def pause(self) -> None: ...

    def reset(self, offset_seconds: float = 0, auto_start: bool = True) -> None: ...

    @property
    def is_running(self) -> bool: ...

    @property
    def total_seconds(self) -> int: ...

    @property
    def minutes(self) -> int: ...

    @property
    def seconds(self) -> int: ...


class Stopwatch:
    """Count-up timer that keeps its elapsed time while paused.

    Mirrors the start/pause/reset surface of a stopwatch hook. The clock is
    injectable so elapsed time can be driven by hand in tests.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None, auto_start: bool = False) -> None:
        self._clock = clock or time.monotonic
        self._accumulated = 0.0
        self._started_at: Optional[float] = None
        if auto_start:
            self.start()

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is None:
            return
        self._accumulated += self._clock() - self._started_at
        self._started_at = None

    def reset(self, offset_seconds: float = 0, auto_start: bool = True) -> None:
        self._accumulated = max(0.0, float(offset_seconds))
        self._started_at = self._clock() if auto_start else None

    @property
    def elapsed(self) -> float:
        running = self._clock() - self._started_at if self._started_at is not None else 0.0
        return self._accumulated + max(0.0, running)

    @property
    def total_seconds(self) -> int:
        return int(self.elapsed)

    @property
    def minutes(self) -> int:
        # No hours field; minutes keep counting past 59
        return self.total_seconds // 60

    @property
    def seconds(self) -> int:
        return self.total_seconds % 60
