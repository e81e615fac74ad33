"""Layout result types produced by the script layout engine.

A LayoutResult is a tree of lines and cells. Every node carries its box in
layout units (one unit is the unit cell) so a renderer can place glyph
artwork without re-deriving direction logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from conscript.domain.glyph import Glyph
from conscript.domain.script import SpacingMode, WritingDirection


class Axis(str, Enum):
    """Geometric axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CellKind(str, Enum):
    """What a layout cell resolved to."""

    GLYPH = "glyph"
    BLANK = "blank"
    NOTDEF = "notdef"


@dataclass(frozen=True)
class Cell:
    """One character position in a line.

    Attributes:
        kind: Resolution of the character
        character: The source character
        glyph: Resolved glyph (only for GLYPH cells)
        advance: Extent along the character axis
        x: Left edge of the cell box
        y: Top edge of the cell box
        width: Box width
        height: Box height
    """

    kind: CellKind
    character: str
    glyph: Glyph | None
    advance: float
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "character": self.character,
            "glyph": self.glyph.character if self.glyph else None,
            "advance": self.advance,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Line:
    """One line of laid-out text.

    Attributes:
        index: Logical line number (first line is 0)
        cells: Cells in logical order
        x: Left edge of the line box
        y: Top edge of the line box
        width: Box width
        height: Box height
    """

    index: int
    cells: tuple[Cell, ...]
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def is_empty(self) -> bool:
        return not self.cells

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "cells": [cell.to_dict() for cell in self.cells],
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class LayoutResult:
    """Laid-out text.

    Attributes:
        lines: Lines in logical order
        direction: Writing direction used
        spacing_mode: Spacing mode used
        line_axis: Axis along which lines are stacked
        char_axis: Axis along which characters flow within a line
        line_sign: +1 if lines advance toward larger coordinates, -1 otherwise
        char_sign: +1 if characters advance toward larger coordinates, -1 otherwise
        width: Total width of the layout
        height: Total height of the layout
    """

    lines: tuple[Line, ...]
    direction: WritingDirection
    spacing_mode: SpacingMode
    line_axis: Axis
    char_axis: Axis
    line_sign: int
    char_sign: int
    width: float
    height: float

    def cells(self) -> list[Cell]:
        """Get every cell, line by line."""
        return [cell for line in self.lines for cell in line.cells]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the layout tree
        """
        return {
            "direction": self.direction.value,
            "spacing_mode": self.spacing_mode.value,
            "line_axis": self.line_axis.value,
            "char_axis": self.char_axis.value,
            "line_sign": self.line_sign,
            "char_sign": self.char_sign,
            "width": self.width,
            "height": self.height,
            "lines": [line.to_dict() for line in self.lines],
        }
