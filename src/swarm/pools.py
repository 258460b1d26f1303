from __future__ import annotations

from vellum.geom import Vec2

from .config import ProjectileKind
from .entities import Enemy, EnemyHandle, Projectile


class EnemyPool:
    """Slot arena for enemies.

    Freed slots are reused lowest-index first; the pool grows when every slot
    is busy. Iteration order is slot order.
    """

    def __init__(self) -> None:
        self._entries: list[Enemy] = []
        self._next_serial = 0

    @property
    def entries(self) -> list[Enemy]:
        return self._entries

    @property
    def active_count(self) -> int:
        return sum(1 for entry in self._entries if entry.active)

    def reset(self) -> None:
        self._entries.clear()
        self._next_serial = 0

    def iter_active(self) -> list[Enemy]:
        return [entry for entry in self._entries if entry.active]

    def _alloc_slot(self) -> int:
        for i, entry in enumerate(self._entries):
            if not entry.active:
                return i
        self._entries.append(Enemy())
        return len(self._entries) - 1

    def spawn(self, *, pos: Vec2, radius: float, speed: float) -> EnemyHandle:
        index = self._alloc_slot()
        serial = self._next_serial
        self._next_serial += 1
        self._entries[index] = Enemy(
            active=True,
            index=index,
            serial=serial,
            pos=pos,
            radius=float(radius),
            speed=float(speed),
        )
        return EnemyHandle(index=index, serial=serial)

    def resolve(self, handle: EnemyHandle) -> Enemy | None:
        index = int(handle.index)
        if not (0 <= index < len(self._entries)):
            return None
        entry = self._entries[index]
        if not entry.active or entry.serial != handle.serial:
            return None
        return entry

    def kill(self, index: int) -> None:
        self._entries[int(index)].active = False


class ProjectilePool:
    def __init__(self) -> None:
        self._entries: list[Projectile] = []

    @property
    def entries(self) -> list[Projectile]:
        return self._entries

    @property
    def active_count(self) -> int:
        return sum(1 for entry in self._entries if entry.active)

    def reset(self) -> None:
        self._entries.clear()

    def iter_active(self) -> list[Projectile]:
        return [entry for entry in self._entries if entry.active]

    def spawn(self, *, pos: Vec2, target: EnemyHandle, kind: ProjectileKind, special: bool) -> int:
        index = None
        for i, entry in enumerate(self._entries):
            if not entry.active:
                index = i
                break
        if index is None:
            self._entries.append(Projectile())
            index = len(self._entries) - 1

        self._entries[index] = Projectile(
            active=True,
            pos=pos,
            radius=float(kind.radius),
            speed=float(kind.speed),
            target=target,
            is_special=bool(special),
            hit_count=0,
            max_hits=int(kind.max_hits),
        )
        return index
