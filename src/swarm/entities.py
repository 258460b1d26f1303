from __future__ import annotations

from dataclasses import dataclass, field

from vellum.geom import Vec2


@dataclass(frozen=True, slots=True)
class EnemyHandle:
    """Non-owning reference to an enemy pool slot.

    `serial` changes every time the slot is reused, so a handle to a destroyed
    enemy never resolves to the enemy that later takes its slot.
    """

    index: int = -1
    serial: int = -1


@dataclass(slots=True)
class Player:
    pos: Vec2 = field(default_factory=Vec2)
    radius: float = 20.0

    def move_to(self, x: float, y: float) -> None:
        self.pos = Vec2(float(x), float(y))


@dataclass(slots=True)
class Enemy:
    active: bool = False
    index: int = -1
    serial: int = -1
    pos: Vec2 = field(default_factory=Vec2)
    radius: float = 10.0
    speed: float = 2.0

    @property
    def handle(self) -> EnemyHandle:
        return EnemyHandle(index=self.index, serial=self.serial)

    def move_toward(self, target: Vec2) -> None:
        # Coincident points give a zero direction: the enemy holds still.
        direction = self.pos.direction_to(target)
        self.pos = self.pos + direction * self.speed


@dataclass(slots=True)
class Projectile:
    active: bool = False
    pos: Vec2 = field(default_factory=Vec2)
    radius: float = 5.0
    speed: float = 5.0
    target: EnemyHandle = field(default_factory=EnemyHandle)
    is_special: bool = False
    hit_count: int = 0
    max_hits: int = 1
    # Last non-zero direction of travel; used once the target is gone.
    heading: Vec2 = field(default_factory=Vec2)

    @property
    def spent(self) -> bool:
        return self.hit_count >= self.max_hits

    def move(self, target_pos: Vec2 | None) -> None:
        if target_pos is not None:
            direction = self.pos.direction_to(target_pos)
            if not direction.is_zero():
                self.heading = direction
        self.pos = self.pos + self.heading * self.speed

    def is_out_of_bounds(self, width: float, height: float) -> bool:
        x = self.pos.x
        y = self.pos.y
        return x < 0.0 or x > float(width) or y < 0.0 or y > float(height)
