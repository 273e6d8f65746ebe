"""
SAP-1 Emulator — Cycle Gate (clock pacing)

The engine calls gate.wait() once per micro-step so a human can watch
the output register change. Pacing never affects computed results: any
object with a wait() method will do, and NullClock makes execution run
at full speed.
"""

import time
from typing import Protocol

from .config import DEFAULT_CLOCK_MS


class CycleGate(Protocol):
    def wait(self) -> None:
        ...


class Clock:
    """Blocking wall-clock pacing, one interval per wait()."""

    def __init__(self, interval_ms: int = DEFAULT_CLOCK_MS):
        self.interval_ms = interval_ms

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int):
        if value < 0:
            raise ValueError(f"Clock interval must be >= 0 ms, got {value}")
        self._interval_ms = value

    def wait(self) -> None:
        if self._interval_ms:
            time.sleep(self._interval_ms / 1000.0)

    def __repr__(self):
        return f"Clock(interval_ms={self._interval_ms})"


class NullClock:
    """No-op gate for tests and full-speed runs."""

    def wait(self) -> None:
        pass


class CountingClock(NullClock):
    """No-op gate that counts how many micro-steps were paced."""

    def __init__(self):
        self.ticks = 0

    def wait(self) -> None:
        self.ticks += 1
