"""CLI application entry point for conscript.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from conscript import __version__
from conscript.cli.output import (
    console,
    print_error,
    print_glyph_detail,
    print_glyph_table,
    print_header,
    print_layout_tree,
    print_project_info,
    print_step,
    print_success,
)
from conscript.config import ConscriptSettings, LoggingConfig
from conscript.core import ScriptEditor
from conscript.domain import ScriptConfig, SpacingMode, WritingDirection
from conscript.exceptions import ConscriptError, ProjectLoadError, ProjectSaveError
from conscript.io import ProjectReader, ProjectWriter
from conscript.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="conscript",
    help="Draw, store and lay out the glyphs of a constructed script.",
    add_completion=False,
    no_args_is_help=True,
)

ProjectArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the project JSON file",
        show_default=False,
    ),
]
DirectionOption = Annotated[
    str | None,
    typer.Option(
        "--direction",
        "-d",
        help="Writing direction (ltr|rtl|ttb-rtl|ttb-ltr)",
    ),
]
SpacingOption = Annotated[
    str | None,
    typer.Option(
        "--spacing",
        "-s",
        help="Spacing mode (proportional|mono)",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Conscript[/bold blue] v{__version__}")
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
    """Draw, store and lay out the glyphs of a constructed script."""


def _parse_direction(value: str) -> WritingDirection:
    try:
        return WritingDirection.parse(value.strip().lower())
    except ValueError:
        print_error(
            f"Invalid direction: {value}",
            details="Valid values: ltr, rtl, ttb-rtl, ttb-ltr",
        )
        raise typer.Exit(code=1) from None


def _parse_spacing(value: str) -> SpacingMode:
    try:
        return SpacingMode(value.strip().lower())
    except ValueError:
        print_error(
            f"Invalid spacing mode: {value}",
            details="Valid values: proportional, mono",
        )
        raise typer.Exit(code=1) from None


def _build_settings(log_file: Path | None, log_level: str, quiet: bool) -> ConscriptSettings:
    """Create settings from CLI arguments and initialize logging."""
    settings = ConscriptSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return settings


def _load_script(project: Path, settings: ConscriptSettings) -> ScriptConfig:
    """Load the script configuration of a project.

    Args:
        project: Project file path
        settings: Settings providing canvas metrics

    Returns:
        Loaded script configuration

    Raises:
        typer.Exit: If the file is missing or not a file
        ProjectLoadError: If the file is not a valid project
    """
    if not project.exists():
        print_error(
            f"Project file not found: {project}",
            details=f"The file '{project}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not project.is_file():
        print_error(
            f"Project path is not a file: {project}",
            details="Please provide a path to a project JSON file.",
        )
        raise typer.Exit(code=1)

    with ProjectReader(
        project,
        canvas_size=settings.canvas.size,
        min_width=settings.canvas.min_glyph_width,
    ) as reader:
        return reader.script


def _handle_errors(error: Exception) -> NoReturn:
    """Report an error raised by a command and exit with status 1."""
    if isinstance(error, ProjectLoadError):
        print_error(f"Could not load project: {error.reason}")
    elif isinstance(error, ProjectSaveError):
        print_error(f"Could not save project: {error.reason}")
    elif isinstance(error, ConscriptError):
        print_error(str(error))
    else:
        print_error(f"Unexpected error: {error}")
    raise typer.Exit(code=1)


@app.command()
def render(
    project: ProjectArgument,
    text: Annotated[
        str,
        typer.Argument(
            help="Text to lay out (use \\n for line breaks)",
            show_default=False,
        ),
    ],
    direction: DirectionOption = None,
    spacing: SpacingOption = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the layout tree as JSON",
        ),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Lay out text with the glyphs of a project.

    Direction and spacing default to the values stored in the project and
    can be overridden for this rendering only.

    Example:
        conscript render project.json "abc" --direction ttb-rtl
    """
    direction_value = _parse_direction(direction) if direction is not None else None
    spacing_value = _parse_spacing(spacing) if spacing is not None else None
    settings = _build_settings(log_file, log_level, quiet or as_json)

    try:
        script = _load_script(project, settings)
        editor = ScriptEditor(script, settings=settings)
        if direction_value is not None:
            editor.set_direction(direction_value)
        if spacing_value is not None:
            editor.set_spacing_mode(spacing_value)

        # Literal "\n" sequences typed on the command line are line breaks
        result = editor.render_text(text.replace("\\n", "\n"))
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    if not quiet:
        print_header(__version__)
        print_step("Project")
        print_project_info(str(project), editor.script)
        print_step("Layout")
    print_layout_tree(result)


@app.command()
def glyphs(
    project: ProjectArgument,
    char: Annotated[
        str | None,
        typer.Option(
            "--char",
            "-c",
            help="Show the layer stack of one glyph (character or its alias)",
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """List the glyphs stored in a project.

    Example:
        conscript glyphs project.json --char a
    """
    settings = _build_settings(log_file, log_level, quiet)

    try:
        script = _load_script(project, settings)
        editor = ScriptEditor(script, settings=settings)
        glyph = editor.get_glyph(char) if char is not None else None
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)

    if not quiet:
        print_header(__version__)
        print_project_info(str(project), script)

    if glyph is not None:
        print_glyph_detail(glyph)
    elif len(script.glyph_set) == 0:
        console.print("\nNo glyphs defined yet.")
    else:
        console.print()
        print_glyph_table(script)


@app.command()
def configure(
    project: ProjectArgument,
    direction: DirectionOption = None,
    spacing: SpacingOption = None,
    toggle_spacing: Annotated[
        bool,
        typer.Option(
            "--toggle-spacing",
            help="Switch between proportional and mono spacing",
        ),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Change the writing direction or spacing mode stored in a project.

    Example:
        conscript configure project.json --direction rtl --spacing proportional
    """
    if spacing is not None and toggle_spacing:
        print_error("Cannot use --spacing and --toggle-spacing together")
        raise typer.Exit(code=1)

    if direction is None and spacing is None and not toggle_spacing:
        print_error(
            "Nothing to configure",
            details="Pass --direction, --spacing or --toggle-spacing.",
        )
        raise typer.Exit(code=1)

    direction_value = _parse_direction(direction) if direction is not None else None
    spacing_value = _parse_spacing(spacing) if spacing is not None else None
    settings = _build_settings(log_file, log_level, quiet)

    try:
        editor = ScriptEditor(_load_script(project, settings), settings=settings)
        if direction_value is not None:
            editor.set_direction(direction_value)
        if spacing_value is not None:
            editor.set_spacing_mode(spacing_value)
        if toggle_spacing:
            editor.toggle_spacing_mode()

        ProjectWriter().save(editor.script, project)
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)

    if not quiet:
        print_success(
            f"Updated {project}",
            details=f"{editor.script.direction.value} · {editor.script.spacing_mode.value}",
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
