from __future__ import annotations

import hashlib
import struct

from .session import GamePhase, SessionState

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_F32 = struct.Struct("<f")

_PHASE_CODES = {
    GamePhase.IDLE: 0,
    GamePhase.RUNNING: 1,
    GamePhase.GAME_OVER: 2,
}


def _h_u8(h: "hashlib._Hash", value: int) -> None:
    h.update(_U8.pack(int(value) & 0xFF))


def _h_u16(h: "hashlib._Hash", value: int) -> None:
    h.update(_U16.pack(int(value) & 0xFFFF))


def _h_u32(h: "hashlib._Hash", value: int) -> None:
    h.update(_U32.pack(int(value) & 0xFFFF_FFFF))


def _h_i32(h: "hashlib._Hash", value: int) -> None:
    raw = int(value) & 0xFFFF_FFFF
    if raw & 0x8000_0000:
        raw -= 0x1_0000_0000
    h.update(_I32.pack(int(raw)))


def _h_f32(h: "hashlib._Hash", value: float) -> None:
    h.update(_F32.pack(float(value)))


def _h_opt_ms(h: "hashlib._Hash", value: float | None) -> None:
    _h_u8(h, 0 if value is None else 1)
    if value is not None:
        _h_f32(h, float(value))


def fingerprint_session_state(state: SessionState) -> int:
    """Return a stable 64-bit digest of the simulation state.

    Positions are packed as float32 so harmless float64 drift does not change
    the digest. Pools are hashed in slot order.
    """

    h = hashlib.blake2b(digest_size=8)

    _h_u8(h, _PHASE_CODES[state.phase])
    _h_u32(h, state.score)
    _h_u32(h, state.tick_index)
    _h_opt_ms(h, state.last_shot_ms)
    _h_opt_ms(h, state.last_special_shot_ms)

    _h_f32(h, state.player.pos.x)
    _h_f32(h, state.player.pos.y)

    enemies = state.enemies.entries
    _h_u16(h, len(enemies))
    for enemy in enemies:
        _h_u8(h, 1 if enemy.active else 0)
        if not enemy.active:
            continue
        _h_u32(h, enemy.serial)
        _h_f32(h, enemy.pos.x)
        _h_f32(h, enemy.pos.y)

    projectiles = state.projectiles.entries
    _h_u16(h, len(projectiles))
    for proj in projectiles:
        _h_u8(h, 1 if proj.active else 0)
        if not proj.active:
            continue
        _h_u8(h, 1 if proj.is_special else 0)
        _h_f32(h, proj.pos.x)
        _h_f32(h, proj.pos.y)
        _h_i32(h, proj.target.index)
        _h_i32(h, proj.target.serial)
        _h_u8(h, proj.hit_count)

    return int.from_bytes(h.digest(), "little")
