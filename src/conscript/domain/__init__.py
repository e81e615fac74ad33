"""Domain models for conscript.

This module contains the core domain models representing glyph artwork,
glyph sets, script configuration and layout results. All models are
designed to be:

- Immutable (frozen dataclasses, replaced rather than mutated)
- Serializable to plain dictionaries
- Independent of the persisted project format

Key classes:
- Point, SubPath, PathGeometry: Vector geometry
- VectorLayer, RasterLayer: Layers of a glyph
- Glyph, GlyphSet: Characters bound to artwork
- ScriptConfig: Glyph set plus direction and spacing
- LayoutResult, Line, Cell: Output of the layout engine
"""

from conscript.domain.glyph import Glyph, GlyphSet, private_use_alias
from conscript.domain.layer import (
    Layer,
    LayerType,
    LineCap,
    RasterLayer,
    VectorLayer,
    layer_from_dict,
    new_layer_id,
)
from conscript.domain.layout import Axis, Cell, CellKind, LayoutResult, Line
from conscript.domain.path import PathGeometry, Point, SubPath
from conscript.domain.script import ScriptConfig, SpacingMode, WritingDirection

__all__: list[str] = [
    # Enums
    "Axis",
    "CellKind",
    "LayerType",
    "LineCap",
    "SpacingMode",
    "WritingDirection",
    # Geometry
    "PathGeometry",
    "Point",
    "SubPath",
    # Layers
    "Layer",
    "RasterLayer",
    "VectorLayer",
    "layer_from_dict",
    "new_layer_id",
    # Glyphs
    "Glyph",
    "GlyphSet",
    "private_use_alias",
    "ScriptConfig",
    # Layout
    "Cell",
    "LayoutResult",
    "Line",
]
