from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
import faulthandler
from pathlib import Path

import pyray as rl

from vellum.draw import RaylibDraw
from vellum.geom import Vec2

from . import __version__
from .config import DEFAULT_BASE_DIR, GameConfig
from .debug_log import close_debug_log, debug_log, init_debug_log
from .render import draw_frame
from .sim.clock import MonotonicTimeSource
from .sim.session import Session


@dataclass(frozen=True, slots=True)
class AppConfig:
    game: GameConfig = field(default_factory=GameConfig)
    base_dir: Path = DEFAULT_BASE_DIR
    fps: int = 60
    seed: int | None = None
    title: str = "Swarm"
    debug: bool = False


def poll_input(session: Session, last_pointer: Vec2 | None) -> Vec2:
    """Forward this frame's mouse/keyboard state to the session commands."""
    mouse = rl.get_mouse_position()
    pointer = Vec2(float(mouse.x), float(mouse.y))
    if last_pointer is None or pointer != last_pointer:
        session.on_pointer_move(pointer.x, pointer.y)
    if rl.is_mouse_button_pressed(rl.MouseButton.MOUSE_BUTTON_LEFT):
        session.on_click()
    if rl.is_key_pressed(rl.KeyboardKey.KEY_F):
        session.on_fire_command(True)
    return pointer


def run_game(config: AppConfig) -> None:
    base_dir = config.base_dir
    base_dir.mkdir(parents=True, exist_ok=True)
    crash_path = base_dir / "crash.log"
    crash_file = crash_path.open("a", encoding="utf-8", buffering=1)
    faulthandler.enable(crash_file)
    crash_file.write(f"\n[{dt.datetime.now().isoformat()}] run_game start\n")

    game = config.game
    if config.debug:
        init_debug_log(
            base_dir=base_dir,
            build_id=__version__,
            width=game.width,
            height=game.height,
            seed=config.seed,
        )

    session = Session(game, time_source=MonotonicTimeSource(), seed=config.seed)
    draw = RaylibDraw()
    rl.init_window(int(game.width), int(game.height), config.title)
    rl.set_target_fps(int(config.fps))
    try:
        last_pointer: Vec2 | None = None
        while not rl.window_should_close():
            last_pointer = poll_input(session, last_pointer)
            session.advance(rl.get_frame_time())
            rl.begin_drawing()
            draw_frame(draw, session.state, session.now_ms())
            rl.end_drawing()
        debug_log("window_closed", score=session.state.score, phase=session.phase.value)
    finally:
        rl.close_window()
        close_debug_log()
        faulthandler.disable()
        crash_file.close()
