from __future__ import annotations

from typing import Callable

from vellum.geom import Vec2

from .config import GameConfig
from .debug_log import debug_log
from .entities import EnemyHandle
from .pools import EnemyPool

RandomSource = Callable[[], float]


class SpawnError(RuntimeError):
    pass


def pick_spawn_pos(*, player_pos: Vec2, rand: RandomSource, config: GameConfig) -> Vec2:
    """Uniform arena position at least `spawn_exclusion_radius` away from the player.

    Rejection sampling: candidates inside the exclusion circle are redrawn.
    """

    width = float(config.width)
    height = float(config.height)
    exclusion = float(config.spawn_exclusion_radius)
    for _ in range(int(config.max_spawn_attempts)):
        x = rand() * width
        y = rand() * height
        candidate = Vec2(x, y)
        if candidate.distance_to(player_pos) >= exclusion:
            return candidate
    debug_log(
        "spawn_error",
        attempts=int(config.max_spawn_attempts),
        exclusion=exclusion,
        player_x=float(player_pos.x),
        player_y=float(player_pos.y),
    )
    raise SpawnError(
        f"no spawn position outside {exclusion:.1f} of player after {config.max_spawn_attempts} attempts"
    )


def spawn_enemy(pool: EnemyPool, *, player_pos: Vec2, rand: RandomSource, config: GameConfig) -> EnemyHandle:
    pos = pick_spawn_pos(player_pos=player_pos, rand=rand, config=config)
    return pool.spawn(pos=pos, radius=config.enemy_radius, speed=config.enemy_speed)


def maybe_spawn_enemy(
    pool: EnemyPool,
    *,
    player_pos: Vec2,
    rand: RandomSource,
    config: GameConfig,
) -> EnemyHandle | None:
    """Per-tick spawn roll."""
    if rand() < float(config.spawn_chance):
        return spawn_enemy(pool, player_pos=player_pos, rand=rand, config=config)
    return None
