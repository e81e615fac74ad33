"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, trees and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from conscript.domain import CellKind, Glyph, LayoutResult, RasterLayer, ScriptConfig

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

_KIND_STYLES = {
    CellKind.GLYPH: "green",
    CellKind.BLANK: "dim",
    CellKind.NOTDEF: "red",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Conscript[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_project_info(project_path: str, script: ScriptConfig) -> None:
    """Print project information.

    Args:
        project_path: Path to the project file
        script: Loaded script configuration
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(project_path)
    console.print(line)
    console.print(
        f"  {len(script.glyph_set):,} glyphs {SYM_DOT} {script.direction.value} "
        f"{SYM_DOT} {script.spacing_mode.value}"
    )


def print_glyph_table(script: ScriptConfig) -> None:
    """Print one row per glyph of the script.

    Args:
        script: Script configuration to list
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Char")
    table.add_column("Alias")
    table.add_column("Layers", justify="right")
    table.add_column("Images", justify="right")
    table.add_column("Width", justify="right")

    for glyph in script.glyph_set:
        images = sum(1 for layer in glyph.layers if isinstance(layer, RasterLayer))
        table.add_row(
            Text(glyph.character),
            f"U+{ord(glyph.alias):04X}" if glyph.alias else "-",
            str(len(glyph.layers)),
            str(images),
            f"{glyph.bounding_width:.1f}",
        )

    console.print(table)


def print_glyph_detail(glyph: Glyph) -> None:
    """Print the layer stack of one glyph, top layer first.

    Args:
        glyph: Glyph to describe
    """
    console.print(
        f"\n[bold]{escape(glyph.character)}[/bold] {SYM_DOT} width {glyph.bounding_width:.1f} "
        f"{SYM_DOT} {len(glyph.layers)} layers"
    )
    for layer in reversed(glyph.layers):
        flags = []
        if not layer.visible:
            flags.append("hidden")
        if layer.locked:
            flags.append("locked")
        suffix = f" [dim]({', '.join(flags)})[/dim]" if flags else ""
        if isinstance(layer, RasterLayer):
            info = f"image {layer.width:g}×{layer.height:g} @ ({layer.x:g}, {layer.y:g})"
        else:
            info = (
                f"{len(layer.geometry.subpaths)} subpaths {SYM_DOT} "
                f"{layer.stroke_width:g}px {layer.cap.value} {layer.color}"
            )
        console.print(f"  {escape(layer.label)} {SYM_DOT} {info}{suffix}")


def _format_cell_label(character: str, kind: CellKind) -> str:
    if kind is CellKind.BLANK:
        return "␠"
    return f"{character} (U+{ord(character):04X})"


def print_layout_tree(result: LayoutResult) -> None:
    """Print a layout result as a tree of lines and cells.

    Args:
        result: Layout to print
    """
    tree = Tree(
        f"[bold]Layout[/bold] {result.direction.value} {SYM_DOT} {result.spacing_mode.value} "
        f"{SYM_DOT} {result.width:g}×{result.height:g}"
    )
    tree.add(
        f"lines along {result.line_axis.value} ({result.line_sign:+d}) {SYM_DOT} "
        f"characters along {result.char_axis.value} ({result.char_sign:+d})",
        style="dim",
    )

    for line in result.lines:
        branch = tree.add(f"Line {line.index + 1} @ ({line.x:g}, {line.y:g})")
        if line.is_empty():
            branch.add("(empty)", style="dim")
        for cell in line.cells:
            style = _KIND_STYLES[cell.kind]
            label = Text(_format_cell_label(cell.character, cell.kind), style=style)
            label.append(
                f"  {cell.kind.value} {SYM_DOT} advance {cell.advance:g} "
                f"{SYM_DOT} ({cell.x:g}, {cell.y:g})",
                style="default",
            )
            branch.add(label)

    console.print(tree)


def print_success(message: str, details: str | None = None) -> None:
    """Print success message.

    Args:
        message: Main message
        details: Optional secondary line
    """
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {message}")
    if details:
        console.print(f"  {details}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
