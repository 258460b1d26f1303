from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_DIR = Path("artifacts") / "runtime"


@dataclass(frozen=True, slots=True)
class ProjectileKind:
    radius: float
    speed: float
    max_hits: int
    cooldown_ms: float

    def __post_init__(self) -> None:
        if float(self.radius) <= 0.0:
            raise ValueError(f"projectile radius must be positive, got {self.radius}")
        if float(self.speed) <= 0.0:
            raise ValueError(f"projectile speed must be positive, got {self.speed}")
        if int(self.max_hits) <= 0:
            raise ValueError(f"max_hits must be positive, got {self.max_hits}")
        if float(self.cooldown_ms) < 0.0:
            raise ValueError(f"cooldown_ms must not be negative, got {self.cooldown_ms}")


NORMAL_SHOT = ProjectileKind(radius=5.0, speed=5.0, max_hits=1, cooldown_ms=2500.0)
SPECIAL_SHOT = ProjectileKind(radius=20.0, speed=8.0, max_hits=5, cooldown_ms=120_000.0)


@dataclass(frozen=True, slots=True)
class GameConfig:
    width: float = 800.0
    height: float = 600.0
    tick_rate: int = 60

    player_radius: float = 20.0
    enemy_radius: float = 10.0
    enemy_speed: float = 2.0

    spawn_exclusion_radius: float = 100.0
    initial_enemies: int = 5
    spawn_chance: float = 0.02
    max_spawn_attempts: int = 10_000

    score_per_kill: int = 10
    normal_shot: ProjectileKind = NORMAL_SHOT
    special_shot: ProjectileKind = SPECIAL_SHOT

    def __post_init__(self) -> None:
        if float(self.width) <= 0.0 or float(self.height) <= 0.0:
            raise ValueError(f"arena must have a positive size, got {self.width}x{self.height}")
        if int(self.tick_rate) <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        if float(self.player_radius) <= 0.0 or float(self.enemy_radius) <= 0.0:
            raise ValueError("player and enemy radius must be positive")
        if float(self.enemy_speed) < 0.0:
            raise ValueError(f"enemy_speed must not be negative, got {self.enemy_speed}")
        if float(self.spawn_exclusion_radius) < 0.0:
            raise ValueError(f"spawn_exclusion_radius must not be negative, got {self.spawn_exclusion_radius}")
        if int(self.initial_enemies) < 0:
            raise ValueError(f"initial_enemies must not be negative, got {self.initial_enemies}")
        if not (0.0 <= float(self.spawn_chance) <= 1.0):
            raise ValueError(f"spawn_chance must be within [0, 1], got {self.spawn_chance}")
        if int(self.max_spawn_attempts) <= 0:
            raise ValueError(f"max_spawn_attempts must be positive, got {self.max_spawn_attempts}")
        if int(self.score_per_kill) < 0:
            raise ValueError(f"score_per_kill must not be negative, got {self.score_per_kill}")

    @property
    def tick_ms(self) -> float:
        return 1000.0 / float(self.tick_rate)

    def shot(self, special: bool) -> ProjectileKind:
        return self.special_shot if special else self.normal_shot
