"""CLI application entry point for arrowroute.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from arrowroute import __version__
from arrowroute.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_route_table,
    print_scene_info,
    print_step,
    print_success,
)
from arrowroute.config import (
    ARROW_PRESETS,
    ArrowConfig,
    ArrowRouteSettings,
    LabelFontConfig,
    LoggingConfig,
    RoutingMode,
)
from arrowroute.core import RenderedArrow, SceneRenderer
from arrowroute.exceptions import (
    ArrowRouteError,
    SceneFormatError,
    SceneLoadError,
    SvgWriteError,
)
from arrowroute.io import Scene, SceneReader, SvgWriter
from arrowroute.utils import RoutingLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="arrowroute",
    help="Route arrows around rectangular obstacles and render them as SVG.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Arrowroute[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Route arrows around rectangular obstacles and render them as SVG."""


def apply_overrides(
    scene: Scene,
    preset: str | None = None,
    mode: RoutingMode | None = None,
    avoid: bool | None = None,
    margin: float | None = None,
) -> Scene:
    """Apply command-line overrides to every arrow configuration of a scene.

    Args:
        scene: Loaded scene
        preset: Preset whose head and label settings replace the scene's
        mode: Routing mode override
        avoid: Obstacle avoidance override
        margin: Obstacle margin override

    Returns:
        New scene with overridden configurations
    """
    route_update: dict[str, object] = {}
    if mode is not None:
        route_update["routing_mode"] = mode
    if avoid is not None:
        route_update["avoid_obstacles"] = avoid
    if margin is not None:
        route_update["margin"] = margin

    def override(config: ArrowConfig) -> ArrowConfig:
        update: dict[str, object] = dict(ARROW_PRESETS[preset]) if preset else {}
        if route_update:
            update["route"] = config.route.model_copy(update=route_update)
        return config.model_copy(update=update) if update else config

    return scene.model_copy(
        update={
            "settings": override(scene.settings),
            "arrows": [
                arrow.model_copy(update={"config": override(arrow.config)})
                if arrow.config is not None
                else arrow
                for arrow in scene.arrows
            ],
        }
    )


def _parse_mode(mode: str | None) -> RoutingMode | None:
    if mode is None:
        return None
    try:
        return RoutingMode(mode.lower())
    except ValueError:
        print_error(
            f"Invalid routing mode: {mode}",
            details="Valid values: simple, pathfinding",
        )
        raise typer.Exit(code=1)


def _check_preset(preset: str | None) -> None:
    if preset is not None and preset not in ARROW_PRESETS:
        print_error(
            f"Unknown preset: {preset}",
            details=f"Valid values: {', '.join(ARROW_PRESETS)}",
        )
        raise typer.Exit(code=1)


def _render_scene(
    renderer: SceneRenderer, scene: Scene, quiet: bool
) -> list[RenderedArrow]:
    if quiet or not scene.arrows:
        return renderer.render(scene)

    with create_progress() as progress:
        task_id = progress.add_task(
            f"Routing {len(scene.arrows)} arrows",
            total=len(scene.arrows),
        )

        def update_progress(completed: int, *_: object) -> None:
            progress.update(task_id, completed=completed)

        return renderer.render(scene, progress_callback=update_progress)


@app.command()
def render(
    scene_file: Annotated[
        Path,
        typer.Argument(
            help="Path to scene JSON file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (default: scene path with .svg suffix)",
        ),
    ] = None,
    mode: Annotated[
        str | None,
        typer.Option(
            "--mode",
            "-m",
            help="Routing mode for conflicting arrows (simple|pathfinding)",
        ),
    ] = None,
    avoid: Annotated[
        bool | None,
        typer.Option(
            "--avoid/--no-avoid",
            help="Route around obstacles (default: from scene)",
            show_default=False,
        ),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option(
            "--margin",
            help="Clearance kept around obstacles",
            min=0.0,
        ),
    ] = None,
    preset: Annotated[
        str | None,
        typer.Option(
            "--preset",
            "-p",
            help="Arrow preset (simple|dimension|connector)",
        ),
    ] = None,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            help="TTF/OTF font used to outline distance labels",
        ),
    ] = None,
    show_obstacles: Annotated[
        bool,
        typer.Option(
            "--show-obstacles",
            help="Draw obstacle rectangles beneath the arrows",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Route every arrow of a scene and write the result as SVG.

    Example:
        arrowroute render diagram.json -o diagram.svg --mode pathfinding --avoid

    Arrows whose direct line crosses an obstacle are bent around it when
    avoidance is enabled; labels require --font.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    routing_mode = _parse_mode(mode)
    _check_preset(preset)

    if font is not None and not font.is_file():
        print_error(
            f"Font file not found: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = ArrowRouteSettings(
        label_font=LabelFontConfig(font_path=font),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    output_path = output if output is not None else scene_file.with_suffix(".svg")

    try:
        if not quiet:
            print_step("Loading scene")

        scene = SceneReader(scene_file).load()
        scene = apply_overrides(scene, preset, routing_mode, avoid, margin)

        if not quiet:
            print_scene_info(str(scene_file), len(scene.arrows), len(scene.obstacles))
            print_step("Routing")

        renderer = SceneRenderer(settings, RoutingLogger(logger))
        arrows = _render_scene(renderer, scene, quiet)

        if not quiet:
            print_step("Writing SVG")

        components = [c for arrow in arrows for c in arrow.components]
        SvgWriter().write(output_path, components, scene.obstacle_bounds(), show_obstacles)

        stats = renderer.stats
        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                arrows=stats.arrows_routed,
                strategies=stats.strategies,
                fallbacks=stats.fallbacks,
                labels=stats.labels_generated,
                errors=len(stats.errors),
                avg_time_ms=stats.avg_route_time_ms,
            )

    except SceneLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except SceneFormatError as e:
        print_error("Invalid scene file", details=e.details)
        raise typer.Exit(code=1)
    except SvgWriteError as e:
        print_error(f"Could not write SVG: {e.reason}")
        raise typer.Exit(code=1)
    except ArrowRouteError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def route(
    scene_file: Annotated[
        Path,
        typer.Argument(
            help="Path to scene JSON file",
            show_default=False,
        ),
    ],
    mode: Annotated[
        str | None,
        typer.Option(
            "--mode",
            "-m",
            help="Routing mode for conflicting arrows (simple|pathfinding)",
        ),
    ] = None,
    avoid: Annotated[
        bool | None,
        typer.Option(
            "--avoid/--no-avoid",
            help="Route around obstacles (default: from scene)",
            show_default=False,
        ),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option(
            "--margin",
            help="Clearance kept around obstacles",
            min=0.0,
        ),
    ] = None,
) -> None:
    """Print the routed points of every arrow in a scene.

    Example:
        arrowroute route diagram.json --mode pathfinding --avoid
    """
    routing_mode = _parse_mode(mode)

    try:
        scene = SceneReader(scene_file).load()
    except SceneLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except SceneFormatError as e:
        print_error("Invalid scene file", details=e.details)
        raise typer.Exit(code=1)

    scene = apply_overrides(scene, None, routing_mode, avoid, margin)
    logger = configure_logging(quiet=True)
    renderer = SceneRenderer(ArrowRouteSettings(), RoutingLogger(logger))
    print_route_table(renderer.render(scene))


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
