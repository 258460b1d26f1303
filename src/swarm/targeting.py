from __future__ import annotations

from typing import Sequence

from vellum.geom import Vec2
from vellum.math import clamp01

from .config import ProjectileKind
from .entities import Enemy
from .pools import EnemyPool, ProjectilePool


def cooldown_ready(last_shot_ms: float | None, cooldown_ms: float, now_ms: float) -> bool:
    if last_shot_ms is None:
        return True
    return float(now_ms) - float(last_shot_ms) >= float(cooldown_ms)


def cooldown_progress(last_shot_ms: float | None, cooldown_ms: float, now_ms: float) -> float:
    """Fraction of the cooldown that has elapsed, for the HUD indicator."""
    if last_shot_ms is None or float(cooldown_ms) <= 0.0:
        return 1.0
    remaining = max(0.0, float(cooldown_ms) - (float(now_ms) - float(last_shot_ms)))
    return clamp01(1.0 - remaining / float(cooldown_ms))


def find_nearest_enemy(enemies: Sequence[Enemy], origin: Vec2) -> Enemy | None:
    # Strict `<` keeps the first enemy on ties.
    best: Enemy | None = None
    best_dist_sq = float("inf")
    for enemy in enemies:
        if not enemy.active:
            continue
        dist_sq = Vec2.distance_sq(origin, enemy.pos)
        if dist_sq < best_dist_sq:
            best_dist_sq = dist_sq
            best = enemy
    return best


def fire_at_nearest(
    *,
    enemies: EnemyPool,
    projectiles: ProjectilePool,
    origin: Vec2,
    kind: ProjectileKind,
    special: bool,
    last_shot_ms: float | None,
    now_ms: float,
) -> int | None:
    """Spawn a projectile aimed at the enemy nearest to `origin`.

    Returns the projectile slot, or None when the shot is still cooling down or
    there is nothing to shoot at. Only a successful shot should restart the
    cooldown; the caller records `now_ms` when a slot is returned.
    """

    if not cooldown_ready(last_shot_ms, kind.cooldown_ms, now_ms):
        return None
    target = find_nearest_enemy(enemies.entries, origin)
    if target is None:
        return None
    return projectiles.spawn(pos=origin, target=target.handle, kind=kind, special=special)
