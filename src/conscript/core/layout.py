"""Direction-aware text layout for conscript text.

``render_text`` turns a string and a script configuration into a tree of
lines and cells. It is a pure function: identical inputs always produce an
equal LayoutResult, which makes it safe to call on every keystroke.

Layout happens in two steps:

1. Resolution: every character becomes a glyph cell (literal lookup, then
   private-use alias), a blank cell (space), or a not-defined cell.
2. Placement: the writing direction selects a line axis and a character
   axis from ``DIRECTION_TABLE``; cells advance along the character axis
   and lines are stacked along the line axis. Reversed axes are mirrored
   inside the overall extent so all coordinates are non-negative.
"""

from dataclasses import dataclass

from conscript.config import CanvasConfig, LayoutConfig
from conscript.domain import (
    Axis,
    Cell,
    CellKind,
    Glyph,
    GlyphSet,
    LayoutResult,
    Line,
    ScriptConfig,
    SpacingMode,
    WritingDirection,
)

LINE_BREAK = "\n"
BLANK_CHARACTER = " "


@dataclass(frozen=True)
class DirectionSpec:
    """Axis assignment for a writing direction.

    Attributes:
        line_axis: Axis along which successive lines are stacked
        char_axis: Axis along which characters flow within a line
        line_sign: +1 if lines stack toward larger coordinates (down/right)
        char_sign: +1 if characters flow toward larger coordinates
    """

    line_axis: Axis
    char_axis: Axis
    line_sign: int
    char_sign: int


DIRECTION_TABLE: dict[WritingDirection, DirectionSpec] = {
    WritingDirection.LTR: DirectionSpec(Axis.VERTICAL, Axis.HORIZONTAL, 1, 1),
    WritingDirection.RTL: DirectionSpec(Axis.VERTICAL, Axis.HORIZONTAL, 1, -1),
    WritingDirection.TTB_RTL: DirectionSpec(Axis.HORIZONTAL, Axis.VERTICAL, -1, 1),
    WritingDirection.TTB_LTR: DirectionSpec(Axis.HORIZONTAL, Axis.VERTICAL, 1, 1),
}


def split_lines(text: str) -> list[str]:
    """Split text into logical lines.

    ``\\r\\n`` is treated as a single line break. Empty lines are kept.

    Examples:
        >>> split_lines("ab\\n\\ncd")
        ['ab', '', 'cd']
    """
    return text.replace("\r\n", LINE_BREAK).split(LINE_BREAK)


def resolve_character(character: str, glyph_set: GlyphSet) -> tuple[CellKind, Glyph | None]:
    """Resolve one character against a glyph set.

    A space is always a blank cell, even when a glyph is registered for it.
    Otherwise a glyph found by literal character or alias wins, and anything
    else falls back to the not-defined cell. Never raises.

    Args:
        character: Character to resolve
        glyph_set: Glyphs to search

    Returns:
        Tuple of (cell kind, glyph or None)
    """
    if character == BLANK_CHARACTER:
        return CellKind.BLANK, None
    glyph = glyph_set.lookup(character)
    if glyph is not None:
        return CellKind.GLYPH, glyph
    return CellKind.NOTDEF, None


def cell_advance(
    kind: CellKind,
    glyph: Glyph | None,
    spacing_mode: SpacingMode,
    layout: LayoutConfig,
    canvas: CanvasConfig,
) -> float:
    """Compute a cell's advance along the character axis.

    - blank: ``blank_fraction`` of the unit cell in either mode
    - mono: one unit cell
    - proportional glyph: ``bounding_width / canvas size`` of the unit cell
    - proportional not-defined: ``notdef_fraction`` of the unit cell
    """
    if kind is CellKind.BLANK:
        return layout.blank_fraction * layout.unit
    if spacing_mode is SpacingMode.MONO:
        return layout.unit
    if kind is CellKind.GLYPH and glyph is not None:
        return glyph.bounding_width / canvas.size * layout.unit
    return layout.notdef_fraction * layout.unit


def render_text(
    text: str,
    script: ScriptConfig,
    layout: LayoutConfig | None = None,
    canvas: CanvasConfig | None = None,
) -> LayoutResult:
    """Lay out ``text`` with the glyphs, direction and spacing of ``script``.

    Args:
        text: Text to lay out; ``\\n`` separates lines
        script: Glyph set, writing direction and spacing mode
        layout: Layout metrics (defaults if None)
        canvas: Canvas metrics for proportional advances (defaults if None)

    Returns:
        LayoutResult with one Line per logical line, in logical order
    """
    layout = layout or LayoutConfig()
    canvas = canvas or CanvasConfig()
    spec = DIRECTION_TABLE[script.direction]

    # Resolution
    resolved: list[list[tuple[str, CellKind, Glyph | None, float]]] = []
    for raw_line in split_lines(text):
        row = []
        for character in raw_line:
            kind, glyph = resolve_character(character, script.glyph_set)
            advance = cell_advance(kind, glyph, script.spacing_mode, layout, canvas)
            row.append((character, kind, glyph, advance))
        resolved.append(row)

    # Placement
    thickness = layout.unit
    pitch = thickness + layout.line_gap * layout.unit
    line_count = len(resolved)
    line_lengths = [sum(entry[3] for entry in row) for row in resolved]
    flow_extent = max(line_lengths, default=0.0)
    stack_extent = line_count * pitch - layout.line_gap * layout.unit

    lines: list[Line] = []
    for index, row in enumerate(resolved):
        slot = index if spec.line_sign > 0 else line_count - 1 - index
        line_position = slot * pitch

        cells: list[Cell] = []
        offset = 0.0
        for character, kind, glyph, advance in row:
            if spec.char_sign > 0:
                flow_position = offset
            else:
                flow_position = flow_extent - offset - advance
            offset += advance
            x, y, width, height = _box(spec, flow_position, line_position, advance, thickness)
            cells.append(
                Cell(
                    kind=kind,
                    character=character,
                    glyph=glyph,
                    advance=advance,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                )
            )

        # Lines span the full flow extent so empty lines still occupy a slot
        x, y, width, height = _box(spec, 0.0, line_position, flow_extent, thickness)
        lines.append(Line(index=index, cells=tuple(cells), x=x, y=y, width=width, height=height))

    if spec.char_axis is Axis.HORIZONTAL:
        total_width, total_height = flow_extent, stack_extent
    else:
        total_width, total_height = stack_extent, flow_extent

    return LayoutResult(
        lines=tuple(lines),
        direction=script.direction,
        spacing_mode=script.spacing_mode,
        line_axis=spec.line_axis,
        char_axis=spec.char_axis,
        line_sign=spec.line_sign,
        char_sign=spec.char_sign,
        width=total_width,
        height=total_height,
    )


def _box(
    spec: DirectionSpec,
    flow_position: float,
    line_position: float,
    flow_size: float,
    thickness: float,
) -> tuple[float, float, float, float]:
    """Map (flow, line) coordinates to an (x, y, width, height) box."""
    if spec.char_axis is Axis.HORIZONTAL:
        return flow_position, line_position, flow_size, thickness
    return line_position, flow_position, thickness, flow_size
