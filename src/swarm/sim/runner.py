from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable

import msgspec

from vellum.geom import Vec2

from ..config import GameConfig
from .clock import ManualTimeSource
from .fingerprint import fingerprint_session_state
from .session import GamePhase, Session


@dataclass(frozen=True, slots=True)
class TickInput:
    """Commands applied right before a tick."""

    pointer: Vec2 | None = None
    fire: bool = False
    fire_special: bool = False


InputScript = Callable[[int], TickInput]


class RunSummary(msgspec.Struct, forbid_unknown_fields=True):
    """Totals for a whole run.

    `score`, `kills` and the shot counters add up over every game played in the
    run (a run restarts after game over when not stopping on it). `enemies`,
    `projectiles`, `game_over` and `fingerprint` describe the final game.
    """

    seed: int
    tick_rate: int
    ticks: int
    games: int
    elapsed_ms: float
    score: int
    kills: int
    shots_fired: int
    special_shots_fired: int
    enemies: int
    projectiles: int
    game_over: bool
    fingerprint: str


def idle_script(tick_index: int) -> TickInput:
    return TickInput()


def interval_script(
    *,
    fire_every: int = 0,
    special_every: int = 0,
    orbit_radius: float = 0.0,
    orbit_center: Vec2 = Vec2(400.0, 300.0),
    orbit_period: int = 240,
) -> InputScript:
    """Fire on fixed tick intervals; zero disables that attack.

    With a positive `orbit_radius` the pointer circles `orbit_center` once every
    `orbit_period` ticks, starting at angle zero.
    """

    fire_every = int(fire_every)
    special_every = int(special_every)
    orbit_radius = float(orbit_radius)
    orbit_period = int(orbit_period)
    if fire_every < 0 or special_every < 0:
        raise ValueError("fire intervals must not be negative")
    if orbit_radius < 0.0:
        raise ValueError(f"orbit_radius must not be negative, got {orbit_radius}")
    if orbit_period <= 0:
        raise ValueError(f"orbit_period must be positive, got {orbit_period}")

    def _pointer(tick_index: int) -> Vec2 | None:
        if orbit_radius <= 0.0:
            return None
        angle = 2.0 * math.pi * float(tick_index % orbit_period) / float(orbit_period)
        return Vec2(
            orbit_center.x + math.cos(angle) * orbit_radius,
            orbit_center.y + math.sin(angle) * orbit_radius,
        )

    def _script(tick_index: int) -> TickInput:
        return TickInput(
            pointer=_pointer(tick_index),
            fire=fire_every > 0 and tick_index % fire_every == 0,
            fire_special=special_every > 0 and tick_index % special_every == 0,
        )

    return _script


def run_headless(
    *,
    ticks: int,
    seed: int = 0,
    config: GameConfig | None = None,
    script: InputScript = idle_script,
    stop_on_game_over: bool = True,
) -> tuple[Session, RunSummary]:
    """Run a session without a window, one tick per simulated frame.

    Time advances by exactly one tick period per tick, so the result depends
    only on `seed`, `config` and `script`. With `stop_on_game_over=False` the
    session restarts after each game over until `ticks` have run.
    """

    ticks = int(ticks)
    if ticks <= 0:
        raise ValueError(f"ticks must be positive, got {ticks}")

    clock = ManualTimeSource()
    session = Session(config, time_source=clock, seed=int(seed))
    session.init()
    tick_ms = float(session.config.tick_ms)

    games = 1
    score = 0
    kills = 0
    shots = 0
    special_shots = 0
    ran = 0
    for tick_index in range(ticks):
        inp = script(tick_index)
        if inp.pointer is not None:
            session.on_pointer_move(inp.pointer.x, inp.pointer.y)
        if inp.fire and session.on_fire_command(False) is not None:
            shots += 1
        if inp.fire_special and session.on_fire_command(True) is not None:
            special_shots += 1

        result = session.tick()
        ran += 1
        score += result.score_delta
        kills += result.kills
        clock.advance(tick_ms)
        if session.phase is GamePhase.GAME_OVER:
            if stop_on_game_over:
                break
            session.on_restart_command()
            games += 1

    state = session.state
    summary = RunSummary(
        seed=int(seed),
        tick_rate=int(session.config.tick_rate),
        ticks=ran,
        games=games,
        elapsed_ms=float(clock.now_ms()),
        score=score,
        kills=kills,
        shots_fired=shots,
        special_shots_fired=special_shots,
        enemies=state.enemies.active_count,
        projectiles=state.projectiles.active_count,
        game_over=state.phase is GamePhase.GAME_OVER,
        fingerprint=f"{fingerprint_session_state(state):016x}",
    )
    return session, summary


def encode_summary_json(summary: RunSummary) -> bytes:
    return msgspec.json.encode(summary)


def decode_summary_json(data: bytes) -> RunSummary:
    return msgspec.json.decode(data, type=RunSummary)
