from __future__ import annotations

from vellum.color import BLACK, BLUE, GRAY, PURPLE, RED, RGBA, WHITE, YELLOW
from vellum.draw import DrawBackend
from vellum.geom import Rect, Vec2

from .entities import Projectile
from .pools import EnemyPool
from .sim.session import GamePhase, SessionState
from .targeting import cooldown_progress

TRAIL_LENGTH = 30.0
TRAIL_COLOR = PURPLE.with_alpha(0.5)
OVERLAY_COLOR = BLACK.with_alpha(0.75)

INDICATOR_RADIUS = 20.0
NORMAL_INDICATOR_POS = Vec2(10.0, 10.0)
SPECIAL_INDICATOR_POS = Vec2(10.0, 50.0)
SCORE_POS = Vec2(10.0, 100.0)
SCORE_TEXT_SIZE = 24


def projectile_color(projectile: Projectile) -> RGBA:
    return PURPLE if projectile.is_special else YELLOW


def projectile_facing(projectile: Projectile, enemies: EnemyPool) -> Vec2:
    target = enemies.resolve(projectile.target)
    if target is not None:
        direction = projectile.pos.direction_to(target.pos)
        if not direction.is_zero():
            return direction
    return projectile.heading


def draw_projectile_trail(draw: DrawBackend, projectile: Projectile, enemies: EnemyPool) -> None:
    if not projectile.is_special:
        return
    facing = projectile_facing(projectile, enemies)
    end = projectile.pos - facing * TRAIL_LENGTH
    draw.draw_line(projectile.pos, end, projectile.radius * 2.0, TRAIL_COLOR)


def draw_cooldown_indicator(draw: DrawBackend, pos: Vec2, progress: float, color: RGBA) -> None:
    draw.draw_circle(pos, INDICATOR_RADIUS, GRAY)
    # Sweep clockwise from 12 o'clock.
    start = -90.0
    draw.draw_sector(pos, INDICATOR_RADIUS, start, start + 360.0 * float(progress), color)


def draw_world(draw: DrawBackend, state: SessionState) -> None:
    player = state.player
    draw.draw_circle(player.pos, player.radius, BLUE)
    for enemy in state.enemies.iter_active():
        draw.draw_circle(enemy.pos, enemy.radius, RED)
    for projectile in state.projectiles.iter_active():
        draw_projectile_trail(draw, projectile, state.enemies)
        draw.draw_circle(projectile.pos, projectile.radius, projectile_color(projectile))


def draw_hud(draw: DrawBackend, state: SessionState, now_ms: float) -> None:
    config = state.config
    normal = cooldown_progress(state.last_shot_ms, config.normal_shot.cooldown_ms, now_ms)
    special = cooldown_progress(state.last_special_shot_ms, config.special_shot.cooldown_ms, now_ms)
    draw_cooldown_indicator(draw, NORMAL_INDICATOR_POS, normal, YELLOW)
    draw_cooldown_indicator(draw, SPECIAL_INDICATOR_POS, special, PURPLE)
    draw.draw_text(f"Score: {state.score}", SCORE_POS, SCORE_TEXT_SIZE, WHITE, "left")


def draw_game_over(draw: DrawBackend, state: SessionState) -> None:
    config = state.config
    draw.fill_rect(Rect(0.0, 0.0, float(config.width), float(config.height)), OVERLAY_COLOR)
    center = Vec2(float(config.width) * 0.5, float(config.height) * 0.5)
    draw.draw_text("Game Over", Vec2(center.x, center.y - 100.0), 48, WHITE, "center")
    draw.draw_text(f"Final Score: {state.score}", Vec2(center.x, center.y - 20.0), 36, WHITE, "center")
    draw.draw_text("Click to Restart", Vec2(center.x, center.y + 50.0), 24, WHITE, "center")


def draw_start_screen(draw: DrawBackend, state: SessionState) -> None:
    config = state.config
    center = Vec2(float(config.width) * 0.5, float(config.height) * 0.5)
    draw.draw_text("Swarm", Vec2(center.x, center.y - 60.0), 48, WHITE, "center")
    draw.draw_text("Click to Start", Vec2(center.x, center.y + 10.0), 24, WHITE, "center")
    draw.draw_text("Click: fire  F: special", Vec2(center.x, center.y + 50.0), 18, GRAY, "center")


def draw_frame(draw: DrawBackend, state: SessionState, now_ms: float) -> None:
    draw.clear_frame(BLACK)
    if state.phase is GamePhase.IDLE:
        draw_start_screen(draw, state)
        return
    draw_world(draw, state)
    draw_hud(draw, state, now_ms)
    if state.phase is GamePhase.GAME_OVER:
        draw_game_over(draw, state)
