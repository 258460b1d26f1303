from __future__ import annotations

import math
import random

import pytest

from vellum.geom import Vec2

from swarm.config import GameConfig
from swarm.sim.clock import ManualTimeSource
from swarm.sim.session import GamePhase, Session

NEVER_SPAWN = 0.99


def _session(*, rand=lambda: NEVER_SPAWN, config: GameConfig | None = None) -> tuple[Session, ManualTimeSource]:
    clock = ManualTimeSource()
    session = Session(config, time_source=clock, rand=rand)
    return session, clock


def _running_with_enemies(*positions: Vec2) -> tuple[Session, ManualTimeSource]:
    session, clock = _session()
    session.init()
    session.state.enemies.reset()
    for pos in positions:
        session.state.enemies.spawn(pos=pos, radius=10.0, speed=2.0)
    return session, clock


def test_new_session_is_idle() -> None:
    session, _clock = _session()

    assert session.phase is GamePhase.IDLE
    assert session.state.enemies.active_count == 0
    assert session.tick().kills == 0
    assert session.state.tick_index == 0


def test_init_resets_state_and_spawns_initial_enemies() -> None:
    session = Session(time_source=ManualTimeSource(), seed=7)

    session.init()

    state = session.state
    assert session.phase is GamePhase.RUNNING
    assert state.score == 0
    assert state.enemies.active_count == 5
    assert state.projectiles.active_count == 0
    assert state.last_shot_ms is None
    assert state.last_special_shot_ms is None
    assert state.player.pos == Vec2(400.0, 300.0)
    assert state.player.radius == 20.0
    assert session.scheduler.running


def test_both_attacks_available_at_session_start() -> None:
    session, _clock = _running_with_enemies(Vec2(600.0, 300.0))

    assert session.on_fire_command(False) is not None
    assert session.on_fire_command(True) is not None
    assert session.state.projectiles.active_count == 2


def test_normal_fire_twice_within_cooldown_creates_one_projectile() -> None:
    session, clock = _running_with_enemies(Vec2(600.0, 300.0))

    assert session.on_fire_command(False) is not None
    clock.advance(2499.0)
    assert session.on_fire_command(False) is None
    assert session.state.projectiles.active_count == 1

    clock.advance(1.0)
    assert session.on_fire_command(False) is not None
    assert session.state.projectiles.active_count == 2


def test_special_cooldown_is_independent_of_normal() -> None:
    session, clock = _running_with_enemies(Vec2(600.0, 300.0))

    assert session.on_fire_command(True) is not None
    assert session.on_fire_command(False) is not None
    clock.advance(60_000.0)
    assert session.on_fire_command(True) is None
    clock.advance(60_000.0)
    assert session.on_fire_command(True) is not None


def test_fire_without_enemies_does_not_consume_cooldown() -> None:
    session, _clock = _running_with_enemies()

    assert session.on_fire_command(False) is None
    assert session.state.projectiles.active_count == 0
    assert session.state.last_shot_ms is None

    session.state.enemies.spawn(pos=Vec2(600.0, 300.0), radius=10.0, speed=2.0)
    assert session.on_fire_command(False) is not None


def test_fire_targets_nearest_enemy() -> None:
    session, _clock = _running_with_enemies(Vec2(400.0, 500.0), Vec2(450.0, 300.0))

    slot = session.on_fire_command(False)

    assert slot is not None
    proj = session.state.projectiles.entries[slot]
    near = session.state.enemies.entries[1]
    assert near.pos.distance_to(session.state.player.pos) == pytest.approx(50.0)
    assert proj.target == near.handle


def test_coincident_player_and_enemy_ends_game_without_nan() -> None:
    session, _clock = _running_with_enemies(Vec2(400.0, 300.0))

    result = session.tick()

    enemy = session.state.enemies.entries[0]
    player = session.state.player
    assert result.game_over
    assert session.phase is GamePhase.GAME_OVER
    for value in (enemy.pos.x, enemy.pos.y, player.pos.x, player.pos.y):
        assert not math.isnan(value)


def test_special_projectile_hits_three_enemies_in_one_tick() -> None:
    session, _clock = _running_with_enemies(Vec2(435.0, 300.0), Vec2(434.0, 308.0), Vec2(434.0, 292.0))
    slot = session.on_fire_command(True)
    assert slot is not None

    result = session.tick()

    proj = session.state.projectiles.entries[slot]
    assert not result.game_over
    assert result.kills == 3
    assert proj.hit_count == 3
    assert proj.active
    assert session.state.score == 30


def test_game_over_stops_scheduler_and_ignores_fire() -> None:
    session, _clock = _running_with_enemies(Vec2(410.0, 300.0), Vec2(700.0, 300.0))

    results = session.advance(0.05)

    assert len(results) == 1
    assert results[0].game_over
    assert not session.scheduler.running
    assert session.advance(1.0) == []
    assert session.on_fire_command(False) is None


def test_game_over_tick_still_moves_every_enemy() -> None:
    session, _clock = _running_with_enemies(Vec2(410.0, 300.0), Vec2(700.0, 300.0))

    session.tick()

    assert session.state.enemies.entries[1].pos.x == pytest.approx(698.0)


def test_advance_runs_whole_ticks() -> None:
    session, _clock = _running_with_enemies(Vec2(700.0, 300.0))

    assert len(session.advance(1.0 / 60.0)) == 1
    assert len(session.advance(0.05)) == 3
    assert session.state.tick_index == 4


def test_restart_after_game_over_fully_resets() -> None:
    session = Session(time_source=ManualTimeSource(), seed=3)
    session.init()
    session.state.score = 120
    session.state.enemies.spawn(pos=session.state.player.pos, radius=10.0, speed=2.0)
    session.on_fire_command(False)
    session.tick()
    assert session.phase is GamePhase.GAME_OVER

    assert session.on_restart_command()

    state = session.state
    assert session.phase is GamePhase.RUNNING
    assert state.score == 0
    assert state.enemies.active_count == 5
    assert state.projectiles.active_count == 0
    assert state.last_shot_ms is None
    assert session.scheduler.running


def test_commands_respect_phase() -> None:
    session, _clock = _session()

    assert session.on_fire_command(False) is None
    assert not session.on_restart_command()
    assert session.on_start_command()
    assert not session.on_start_command()
    assert not session.on_restart_command()


def test_click_starts_fires_and_restarts() -> None:
    session, clock = _session()

    session.on_click()
    assert session.phase is GamePhase.RUNNING

    session.on_click()
    assert session.state.projectiles.active_count == 1
    assert session.state.last_shot_ms == clock.now_ms()

    session.state.enemies.spawn(pos=session.state.player.pos, radius=10.0, speed=2.0)
    session.tick()
    assert session.phase is GamePhase.GAME_OVER

    session.on_click()
    assert session.phase is GamePhase.RUNNING
    assert session.state.projectiles.active_count == 0


def test_pointer_move_sets_player_position() -> None:
    session, _clock = _running_with_enemies()

    session.on_pointer_move(12.0, 34.0)

    assert session.state.player.pos == Vec2(12.0, 34.0)


def test_spawn_roll_happens_each_tick() -> None:
    session, _clock = _session(rand=lambda: 0.0)
    session.init()
    before = session.state.enemies.active_count

    result = session.tick()

    assert result.spawned
    assert session.state.enemies.active_count == before + 1


def test_long_seeded_run_keeps_counts_and_score_consistent() -> None:
    session, clock = _session(rand=random.Random(99).random)
    session.init()
    total_kills = 0
    for tick_index in range(900):
        session.on_pointer_move(400.0 + 150.0 * math.cos(tick_index / 40.0), 300.0 + 150.0 * math.sin(tick_index / 40.0))
        session.on_fire_command(False)
        session.on_fire_command(True)
        result = session.tick()
        clock.advance(1000.0 / 60.0)
        total_kills += result.kills
        assert session.state.enemies.active_count >= 0
        assert session.state.projectiles.active_count >= 0
        if session.phase is GamePhase.GAME_OVER:
            break
    assert session.state.score == total_kills * 10
