from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Protocol

from ..debug_log import debug_log


class TimeSource(Protocol):
    def now_ms(self) -> float: ...


class MonotonicTimeSource:
    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


@dataclass(slots=True)
class ManualTimeSource:
    now: float = 0.0

    def now_ms(self) -> float:
        return float(self.now)

    def advance(self, ms: float) -> None:
        self.now = float(self.now) + float(ms)


@dataclass(slots=True)
class FixedStepClock:
    tick_rate: int = 60
    accum: float = 0.0

    def __post_init__(self) -> None:
        tick_rate = int(self.tick_rate)
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.tick_rate = tick_rate
        self.accum = float(self.accum)

    @property
    def dt_tick(self) -> float:
        return 1.0 / float(self.tick_rate)

    def reset(self) -> None:
        self.accum = 0.0

    def advance(self, dt: float, *, max_dt: float = 0.1) -> int:
        dt = float(dt)
        if dt <= 0.0:
            return 0
        if dt > float(max_dt):
            dt = float(max_dt)

        self.accum += dt
        dt_tick = float(self.dt_tick)
        ticks = int((self.accum + 1e-9) / dt_tick)
        if ticks <= 0:
            return 0

        self.accum -= dt_tick * float(ticks)
        if self.accum < 0.0:
            self.accum = 0.0
        return int(ticks)


@dataclass(slots=True)
class TickScheduler:
    """Fixed-rate tick source with a cancellation flag.

    `advance(dt)` converts frame time into whole ticks while running; `stop()`
    cancels pending and future ticks until `start()` is called again.
    """

    clock: FixedStepClock = field(default_factory=FixedStepClock)
    running: bool = False

    def start(self) -> None:
        self.clock.reset()
        self.running = True

    def stop(self) -> None:
        if self.running:
            debug_log("tick_scheduler_stop", pending_s=float(self.clock.accum))
        self.running = False

    def advance(self, dt: float, *, max_dt: float = 0.1) -> int:
        if not self.running:
            return 0
        return self.clock.advance(dt, max_dt=max_dt)
