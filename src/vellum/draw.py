from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, TypeAlias

from .color import RGBA
from .geom import Rect, Vec2

TextAlign: TypeAlias = Literal["left", "center", "right"]

SECTOR_SEGMENTS = 36


class DrawBackend(Protocol):
    def clear_frame(self, color: RGBA) -> None: ...

    def draw_circle(self, center: Vec2, radius: float, color: RGBA) -> None: ...

    def draw_sector(self, center: Vec2, radius: float, start_deg: float, end_deg: float, color: RGBA) -> None: ...

    def draw_line(self, start: Vec2, end: Vec2, thickness: float, color: RGBA) -> None: ...

    def draw_text(self, text: str, pos: Vec2, size: int, color: RGBA, align: TextAlign = "left") -> None: ...

    def fill_rect(self, rect: Rect, color: RGBA) -> None: ...


@dataclass(frozen=True, slots=True)
class DrawCall:
    op: str
    args: tuple[object, ...]


@dataclass(slots=True)
class RecordingDraw:
    """Draw backend that keeps every call; used headless and in tests."""

    calls: list[DrawCall] = field(default_factory=list)

    def _record(self, op: str, *args: object) -> None:
        self.calls.append(DrawCall(op=op, args=tuple(args)))

    def clear_frame(self, color: RGBA) -> None:
        self.calls.clear()
        self._record("clear_frame", color)

    def draw_circle(self, center: Vec2, radius: float, color: RGBA) -> None:
        self._record("draw_circle", center, float(radius), color)

    def draw_sector(self, center: Vec2, radius: float, start_deg: float, end_deg: float, color: RGBA) -> None:
        self._record("draw_sector", center, float(radius), float(start_deg), float(end_deg), color)

    def draw_line(self, start: Vec2, end: Vec2, thickness: float, color: RGBA) -> None:
        self._record("draw_line", start, end, float(thickness), color)

    def draw_text(self, text: str, pos: Vec2, size: int, color: RGBA, align: TextAlign = "left") -> None:
        self._record("draw_text", str(text), pos, int(size), color, align)

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        self._record("fill_rect", rect, color)

    def ops(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def texts(self) -> list[str]:
        return [str(call.args[0]) for call in self.ops("draw_text")]


class RaylibDraw:
    """Draw backend painting into the current raylib frame.

    Callers own `begin_drawing`/`end_drawing`; this only issues primitives.
    """

    def clear_frame(self, color: RGBA) -> None:
        import pyray as rl

        rl.clear_background(color.to_rl())

    def draw_circle(self, center: Vec2, radius: float, color: RGBA) -> None:
        import pyray as rl

        rl.draw_circle_v(center.to_rl(), float(radius), color.to_rl())

    def draw_sector(self, center: Vec2, radius: float, start_deg: float, end_deg: float, color: RGBA) -> None:
        import pyray as rl

        if end_deg <= start_deg:
            return
        rl.draw_circle_sector(
            center.to_rl(),
            float(radius),
            float(start_deg),
            float(end_deg),
            SECTOR_SEGMENTS,
            color.to_rl(),
        )

    def draw_line(self, start: Vec2, end: Vec2, thickness: float, color: RGBA) -> None:
        import pyray as rl

        rl.draw_line_ex(start.to_rl(), end.to_rl(), float(thickness), color.to_rl())

    def draw_text(self, text: str, pos: Vec2, size: int, color: RGBA, align: TextAlign = "left") -> None:
        import pyray as rl

        x = float(pos.x)
        if align != "left":
            width = float(rl.measure_text(text, int(size)))
            x -= width * 0.5 if align == "center" else width
        # `pos.y` is the text baseline; raylib places text by its top edge.
        rl.draw_text(text, int(x), int(float(pos.y) - float(size)), int(size), color.to_rl())

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        import pyray as rl

        rl.draw_rectangle_rec(rect.to_rl(), color.to_rl())
