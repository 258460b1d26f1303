from __future__ import annotations

from dataclasses import dataclass

from vellum.geom import Vec2

from .entities import Enemy, Player, Projectile
from .pools import EnemyPool, ProjectilePool


@dataclass(slots=True)
class CombatResult:
    kills: int = 0
    score: int = 0
    projectiles_removed: int = 0


def circles_overlap(a: Vec2, ra: float, b: Vec2, rb: float) -> bool:
    # Touching edges do not count as a hit.
    return a.distance_to(b) < float(ra) + float(rb)


def update_enemies(enemies: EnemyPool, player: Player) -> bool:
    """Move every enemy toward the player, then test contact.

    Every enemy moves even after a contact is found; the caller applies game
    over once the whole tick has run.
    """

    player_hit = False
    for enemy in enemies.iter_active():
        enemy.move_toward(player.pos)
        if circles_overlap(player.pos, player.radius, enemy.pos, enemy.radius):
            player_hit = True
    return player_hit


def projectile_hit_enemies(
    projectile: Projectile,
    enemies: list[Enemy],
    *,
    pool: EnemyPool,
    score_per_kill: int,
    result: CombatResult,
) -> None:
    """Apply one projectile against the live enemy set.

    Each overlapping enemy is destroyed and scores. Normal projectiles stop
    after the first kill; special ones keep going until `max_hits`.
    """

    for enemy in enemies:
        if not enemy.active:
            continue
        if not circles_overlap(projectile.pos, projectile.radius, enemy.pos, enemy.radius):
            continue
        pool.kill(enemy.index)
        projectile.hit_count += 1
        result.kills += 1
        result.score += int(score_per_kill)
        if not projectile.is_special or projectile.spent:
            return


def update_projectiles(
    projectiles: ProjectilePool,
    enemies: EnemyPool,
    *,
    width: float,
    height: float,
    score_per_kill: int,
) -> CombatResult:
    result = CombatResult()
    for projectile in projectiles.iter_active():
        target = enemies.resolve(projectile.target)
        projectile.move(target.pos if target is not None else None)

        # Earlier projectiles this tick may already have removed enemies.
        projectile_hit_enemies(
            projectile,
            enemies.iter_active(),
            pool=enemies,
            score_per_kill=score_per_kill,
            result=result,
        )

        if projectile.spent or projectile.is_out_of_bounds(width, height):
            projectile.active = False
            result.projectiles_removed += 1
    return result
