from __future__ import annotations

__all__ = [
    "color",
    "draw",
    "geom",
    "math",
]
