from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import typer

from .config import DEFAULT_BASE_DIR, GameConfig

app = typer.Typer(add_completion=False)


def _build_game_config(*, width: int, height: int) -> GameConfig:
    try:
        return replace(GameConfig(), width=float(width), height=float(height))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--width/--height") from exc


@app.command("play")
def cmd_play(
    width: int = typer.Option(800, help="arena/window width"),
    height: int = typer.Option(600, help="arena/window height"),
    fps: int = typer.Option(60, help="target fps"),
    seed: int | None = typer.Option(None, help="spawn RNG seed (default: random)"),
    base_dir: Path = typer.Option(
        DEFAULT_BASE_DIR,
        "--base-dir",
        "--runtime-dir",
        help="base path for runtime files (crash log, debug log)",
    ),
    debug_log: bool = typer.Option(False, "--debug-log", help="write an event log under <base-dir>/logs"),
) -> None:
    """Open the game window."""
    from .app import AppConfig, run_game

    if fps <= 0:
        raise typer.BadParameter(f"fps must be positive, got {fps}", param_hint="--fps")
    game = _build_game_config(width=width, height=height)
    run_game(
        AppConfig(
            game=game,
            base_dir=base_dir,
            fps=int(fps),
            seed=seed,
            debug=bool(debug_log),
        )
    )


@app.command("headless")
def cmd_headless(
    ticks: int = typer.Option(600, help="ticks to simulate (60 per second)"),
    seed: int = typer.Option(0, help="spawn RNG seed"),
    width: int = typer.Option(800, help="arena width"),
    height: int = typer.Option(600, help="arena height"),
    fire_every: int = typer.Option(1, help="attempt a normal shot every N ticks (0 disables)"),
    special_every: int = typer.Option(0, help="attempt a special shot every N ticks (0 disables)"),
    orbit: float = typer.Option(0.0, help="circle the player this far around the arena centre (0 keeps it still)"),
    keep_going: bool = typer.Option(
        False,
        "--keep-going/--stop-on-game-over",
        help="restart after game over instead of stopping",
    ),
    json_output: bool = typer.Option(False, "--json", help="print the summary as JSON"),
) -> None:
    """Run a scripted session without a window and print a summary."""
    from vellum.geom import Vec2

    from .sim.runner import encode_summary_json, interval_script, run_headless

    if ticks <= 0:
        raise typer.BadParameter(f"ticks must be positive, got {ticks}", param_hint="--ticks")
    if fire_every < 0:
        raise typer.BadParameter("must not be negative", param_hint="--fire-every")
    if special_every < 0:
        raise typer.BadParameter("must not be negative", param_hint="--special-every")
    if orbit < 0.0:
        raise typer.BadParameter("must not be negative", param_hint="--orbit")

    game = _build_game_config(width=width, height=height)
    _session, summary = run_headless(
        ticks=ticks,
        seed=seed,
        config=game,
        script=interval_script(
            fire_every=fire_every,
            special_every=special_every,
            orbit_radius=orbit,
            orbit_center=Vec2(float(game.width) * 0.5, float(game.height) * 0.5),
        ),
        stop_on_game_over=not keep_going,
    )
    if json_output:
        typer.echo(encode_summary_json(summary).decode("utf-8"))
        return
    typer.echo(f"ticks={summary.ticks} games={summary.games} elapsed_ms={summary.elapsed_ms:.0f}")
    typer.echo(f"score={summary.score} kills={summary.kills}")
    typer.echo(f"shots={summary.shots_fired} special_shots={summary.special_shots_fired}")
    typer.echo(f"enemies={summary.enemies} projectiles={summary.projectiles}")
    typer.echo(f"game_over={summary.game_over} fingerprint={summary.fingerprint}")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="swarm", args=argv)


if __name__ == "__main__":
    main()
