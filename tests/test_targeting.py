from __future__ import annotations

import pytest

from vellum.geom import Vec2

from swarm.config import NORMAL_SHOT, SPECIAL_SHOT
from swarm.pools import EnemyPool, ProjectilePool
from swarm.targeting import cooldown_progress, cooldown_ready, find_nearest_enemy, fire_at_nearest


def _pool_with(*positions: Vec2) -> EnemyPool:
    pool = EnemyPool()
    for pos in positions:
        pool.spawn(pos=pos, radius=10.0, speed=2.0)
    return pool


def test_cooldown_ready_when_never_fired() -> None:
    assert cooldown_ready(None, 120_000.0, 0.0)


def test_cooldown_ready_boundaries() -> None:
    assert not cooldown_ready(1000.0, 2500.0, 3499.0)
    assert cooldown_ready(1000.0, 2500.0, 3500.0)


def test_cooldown_progress() -> None:
    assert cooldown_progress(None, 2500.0, 0.0) == 1.0
    assert cooldown_progress(1000.0, 2500.0, 1000.0) == 0.0
    assert cooldown_progress(1000.0, 2500.0, 2250.0) == pytest.approx(0.5)
    assert cooldown_progress(1000.0, 2500.0, 99_999.0) == 1.0


def test_find_nearest_enemy_picks_closest() -> None:
    origin = Vec2(400.0, 300.0)
    pool = _pool_with(Vec2(600.0, 300.0), Vec2(450.0, 300.0))

    nearest = find_nearest_enemy(pool.entries, origin)

    assert nearest is pool.entries[1]


def test_find_nearest_enemy_ties_keep_first() -> None:
    origin = Vec2(400.0, 300.0)
    pool = _pool_with(Vec2(500.0, 300.0), Vec2(300.0, 300.0))

    nearest = find_nearest_enemy(pool.entries, origin)

    assert nearest is pool.entries[0]


def test_find_nearest_enemy_skips_dead_slots() -> None:
    origin = Vec2(400.0, 300.0)
    pool = _pool_with(Vec2(410.0, 300.0), Vec2(700.0, 300.0))
    pool.kill(0)

    assert find_nearest_enemy(pool.entries, origin) is pool.entries[1]
    pool.kill(1)
    assert find_nearest_enemy(pool.entries, origin) is None


def test_fire_at_nearest_targets_closest_enemy() -> None:
    enemies = _pool_with(Vec2(600.0, 300.0), Vec2(450.0, 300.0))
    projectiles = ProjectilePool()

    slot = fire_at_nearest(
        enemies=enemies,
        projectiles=projectiles,
        origin=Vec2(400.0, 300.0),
        kind=NORMAL_SHOT,
        special=False,
        last_shot_ms=None,
        now_ms=0.0,
    )

    assert slot is not None
    proj = projectiles.entries[slot]
    assert proj.target == enemies.entries[1].handle
    assert proj.pos == Vec2(400.0, 300.0)
    assert not proj.is_special


def test_fire_at_nearest_special_uses_special_kind() -> None:
    enemies = _pool_with(Vec2(600.0, 300.0))
    projectiles = ProjectilePool()

    slot = fire_at_nearest(
        enemies=enemies,
        projectiles=projectiles,
        origin=Vec2(400.0, 300.0),
        kind=SPECIAL_SHOT,
        special=True,
        last_shot_ms=None,
        now_ms=0.0,
    )

    assert slot is not None
    proj = projectiles.entries[slot]
    assert proj.is_special
    assert proj.radius == 20.0
    assert proj.speed == 8.0
    assert proj.max_hits == 5


def test_fire_at_nearest_without_enemies_is_noop() -> None:
    projectiles = ProjectilePool()

    slot = fire_at_nearest(
        enemies=EnemyPool(),
        projectiles=projectiles,
        origin=Vec2(),
        kind=NORMAL_SHOT,
        special=False,
        last_shot_ms=None,
        now_ms=0.0,
    )

    assert slot is None
    assert projectiles.active_count == 0


def test_fire_at_nearest_on_cooldown_is_noop() -> None:
    enemies = _pool_with(Vec2(600.0, 300.0))
    projectiles = ProjectilePool()

    slot = fire_at_nearest(
        enemies=enemies,
        projectiles=projectiles,
        origin=Vec2(400.0, 300.0),
        kind=NORMAL_SHOT,
        special=False,
        last_shot_ms=0.0,
        now_ms=2499.0,
    )

    assert slot is None
    assert projectiles.active_count == 0
