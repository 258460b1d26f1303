from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import random

from vellum.geom import Vec2

from ..collision import update_enemies, update_projectiles
from ..config import GameConfig
from ..debug_log import debug_log
from ..entities import Player
from ..pools import EnemyPool, ProjectilePool
from ..spawn import RandomSource, maybe_spawn_enemy, spawn_enemy
from ..targeting import fire_at_nearest
from .clock import FixedStepClock, MonotonicTimeSource, TickScheduler, TimeSource


class GamePhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass(slots=True)
class SessionState:
    config: GameConfig
    player: Player
    enemies: EnemyPool = field(default_factory=EnemyPool)
    projectiles: ProjectilePool = field(default_factory=ProjectilePool)
    phase: GamePhase = GamePhase.IDLE
    score: int = 0
    last_shot_ms: float | None = None
    last_special_shot_ms: float | None = None
    tick_index: int = 0

    @classmethod
    def build(cls, config: GameConfig) -> SessionState:
        center = Vec2(float(config.width) * 0.5, float(config.height) * 0.5)
        return cls(config=config, player=Player(pos=center, radius=float(config.player_radius)))

    def last_shot(self, special: bool) -> float | None:
        return self.last_special_shot_ms if special else self.last_shot_ms

    def record_shot(self, special: bool, now_ms: float) -> None:
        if special:
            self.last_special_shot_ms = float(now_ms)
        else:
            self.last_shot_ms = float(now_ms)


@dataclass(frozen=True, slots=True)
class TickResult:
    tick_index: int
    kills: int = 0
    score_delta: int = 0
    projectiles_removed: int = 0
    spawned: bool = False
    game_over: bool = False


class Session:
    """Owns one game: state, tick scheduling and the command handlers.

    Input collaborators call the `on_*` handlers between ticks. `advance(dt)`
    turns frame time into fixed ticks; `tick()` runs exactly one.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        time_source: TimeSource | None = None,
        rand: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.time_source: TimeSource = time_source if time_source is not None else MonotonicTimeSource()
        self.rand: RandomSource = rand if rand is not None else random.Random(seed).random
        self.scheduler = TickScheduler(clock=FixedStepClock(tick_rate=int(self.config.tick_rate)))
        self.state = SessionState.build(self.config)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def now_ms(self) -> float:
        return float(self.time_source.now_ms())

    def init(self) -> None:
        """Start a fresh game, discarding everything from the previous one."""
        state = SessionState.build(self.config)
        state.phase = GamePhase.RUNNING
        self.state = state
        for _ in range(int(self.config.initial_enemies)):
            spawn_enemy(state.enemies, player_pos=state.player.pos, rand=self.rand, config=self.config)
        self.scheduler.start()
        debug_log("session_init", enemies=state.enemies.active_count)

    def tick(self) -> TickResult:
        state = self.state
        if state.phase is not GamePhase.RUNNING:
            return TickResult(tick_index=state.tick_index)

        config = self.config
        player_hit = update_enemies(state.enemies, state.player)
        combat = update_projectiles(
            state.projectiles,
            state.enemies,
            width=config.width,
            height=config.height,
            score_per_kill=config.score_per_kill,
        )
        state.score += combat.score

        spawned = maybe_spawn_enemy(state.enemies, player_pos=state.player.pos, rand=self.rand, config=config)

        result = TickResult(
            tick_index=state.tick_index,
            kills=combat.kills,
            score_delta=combat.score,
            projectiles_removed=combat.projectiles_removed,
            spawned=spawned is not None,
            game_over=player_hit,
        )
        state.tick_index += 1
        if player_hit:
            state.phase = GamePhase.GAME_OVER
            self.scheduler.stop()
            debug_log("game_over", score=state.score, tick=state.tick_index)
        return result

    def advance(self, dt: float) -> list[TickResult]:
        results: list[TickResult] = []
        for _ in range(self.scheduler.advance(dt)):
            if self.state.phase is not GamePhase.RUNNING:
                break
            results.append(self.tick())
        return results

    # Command handlers.

    def on_pointer_move(self, x: float, y: float) -> None:
        self.state.player.move_to(x, y)

    def on_fire_command(self, special: bool = False) -> int | None:
        state = self.state
        if state.phase is not GamePhase.RUNNING:
            return None
        special = bool(special)
        now = self.now_ms()
        slot = fire_at_nearest(
            enemies=state.enemies,
            projectiles=state.projectiles,
            origin=state.player.pos,
            kind=self.config.shot(special),
            special=special,
            last_shot_ms=state.last_shot(special),
            now_ms=now,
        )
        if slot is not None:
            state.record_shot(special, now)
            debug_log("fire", special=special, slot=slot, tick=state.tick_index)
        return slot

    def on_start_command(self) -> bool:
        if self.state.phase is not GamePhase.IDLE:
            return False
        self.init()
        return True

    def on_restart_command(self) -> bool:
        if self.state.phase is not GamePhase.GAME_OVER:
            return False
        debug_log("restart", previous_score=self.state.score)
        self.init()
        return True

    def on_click(self) -> None:
        phase = self.state.phase
        if phase is GamePhase.IDLE:
            self.on_start_command()
        elif phase is GamePhase.GAME_OVER:
            self.on_restart_command()
        else:
            self.on_fire_command(False)
