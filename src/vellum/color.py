from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .math import clamp

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class RGBA:
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> RGBA:
        inv_255 = 1.0 / 255.0
        return cls(float(r) * inv_255, float(g) * inv_255, float(b) * inv_255, float(a) * inv_255)

    def clamped(self) -> RGBA:
        return RGBA(
            r=clamp(self.r, 0.0, 1.0),
            g=clamp(self.g, 0.0, 1.0),
            b=clamp(self.b, 0.0, 1.0),
            a=clamp(self.a, 0.0, 1.0),
        )

    def with_alpha(self, alpha: float) -> RGBA:
        return RGBA(r=self.r, g=self.g, b=self.b, a=float(alpha))

    def to_bytes(self) -> tuple[int, int, int, int]:
        c = self.clamped()
        return (
            int(c.r * 255.0 + 0.5),
            int(c.g * 255.0 + 0.5),
            int(c.b * 255.0 + 0.5),
            int(c.a * 255.0 + 0.5),
        )

    def to_rl(self) -> rl.Color:
        import pyray as rl

        return rl.Color(*self.to_bytes())


# CSS named colours used by the game.
BLACK = RGBA.from_bytes(0, 0, 0)
WHITE = RGBA.from_bytes(255, 255, 255)
GRAY = RGBA.from_bytes(128, 128, 128)
BLUE = RGBA.from_bytes(0, 0, 255)
RED = RGBA.from_bytes(255, 0, 0)
YELLOW = RGBA.from_bytes(255, 255, 0)
PURPLE = RGBA.from_bytes(128, 0, 128)
