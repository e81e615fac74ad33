"""Core algorithms for conscript.

This module contains the core algorithms for:

- Geometry operations (segment distance, glyph bounding width)
- Path synthesis (freehand, line, rectangle, circle)
- Erasing (segment hit-testing, subpath splitting)
- Layer history (snapshot undo/redo)
- Glyph editing (edit sessions, editor facade)
- Text layout (direction-aware line and cell placement)

Key functions:
- render_text: Lay out text with a script configuration
- erase_layers: Erase around a point across a layer stack
- glyph_bounding_width: Derive a glyph's horizontal extent

Key classes:
- EditSession: Working copy of one glyph's layers
- ScriptEditor: Loads and saves glyphs of a document
- LayerHistory: Undo/redo stacks
"""

from conscript.core.editor import ScriptEditor
from conscript.core.eraser import EraseResult, erase_geometry, erase_layers, erase_subpath
from conscript.core.geometry import distance_to_segment, glyph_bounding_width
from conscript.core.history import LayerHistory
from conscript.core.layout import DIRECTION_TABLE, DirectionSpec, render_text
from conscript.core.session import EditSession
from conscript.core.synthesizer import (
    DrawMode,
    Gesture,
    circle_path,
    freehand_path,
    line_path,
    rectangle_path,
)

__all__ = [
    "DIRECTION_TABLE",
    "DirectionSpec",
    "DrawMode",
    "EditSession",
    "EraseResult",
    "Gesture",
    "LayerHistory",
    "ScriptEditor",
    "circle_path",
    "distance_to_segment",
    "erase_geometry",
    "erase_layers",
    "erase_subpath",
    "freehand_path",
    "glyph_bounding_width",
    "line_path",
    "rectangle_path",
    "render_text",
]
