"""Converters between the persisted project format and domain models.

Projects store the script configuration in the shape the surrounding
application writes it: glyphs keyed by ``char`` with a ``pua`` alias, a
``viewWidth`` and a list of ``strokes``. Vector geometry is stored as SVG
path data. Parsing goes through fontTools' SVG path parser into a
RecordingPen so that any valid path data (relative commands, curves, arcs)
can be imported; curves are flattened to polylines.
"""

from typing import Any

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment
from fontTools.pens.recordingPen import RecordingPen
from fontTools.svgLib.path import parse_path

from conscript.core._bezier import flatten_cubic, flatten_quadratic
from conscript.core.geometry import glyph_bounding_width
from conscript.domain import (
    Glyph,
    GlyphSet,
    Layer,
    LayerType,
    LineCap,
    PathGeometry,
    Point,
    RasterLayer,
    ScriptConfig,
    SpacingMode,
    SubPath,
    VectorLayer,
    WritingDirection,
    new_layer_id,
    private_use_alias,
)
from conscript.exceptions import PathDataError, ProjectFormatError

# Maximum deviation allowed when flattening imported curves (canvas units)
CURVE_TOLERANCE = 0.5
# Opacity of a glyph-level reference image found in older projects
LEGACY_IMAGE_OPACITY = 0.8


def format_number(value: float) -> str:
    """Format a coordinate for path data without losing precision.

    Integral values are written without a fractional part; anything else
    uses the shortest representation that reads back to the same float.

    Examples:
        >>> format_number(100.0)
        '100'
        >>> format_number(12.5)
        '12.5'
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def geometry_to_path_data(geometry: PathGeometry) -> str:
    """Serialize geometry as SVG path data.

    Each subpath is written as ``M x y`` followed by ``L x y`` per further
    point, with a trailing ``Z`` for closed subpaths. The path parser adds a
    closing edge back to the start point and reading strips it again, so a
    closed subpath that already ends on its start point repeats that point
    once more before the ``Z``.

    Args:
        geometry: Geometry to serialize

    Returns:
        SVG path data string (empty for empty geometry)
    """
    parts: list[str] = []
    for subpath in geometry.subpaths:
        if not subpath.points:
            continue
        first, *rest = subpath.points
        commands = [f"M {format_number(first.x)} {format_number(first.y)}"]
        commands.extend(f"L {format_number(p.x)} {format_number(p.y)}" for p in rest)
        if subpath.closed:
            if len(subpath.points) > 1 and subpath.points[-1] == first:
                commands.append(f"L {format_number(first.x)} {format_number(first.y)}")
            commands.append("Z")
        parts.append(" ".join(commands))
    return " ".join(parts)


def path_data_to_geometry(path_data: str, tolerance: float = CURVE_TOLERANCE) -> PathGeometry:
    """Parse SVG path data into geometry.

    Args:
        path_data: SVG path data
        tolerance: Curve flattening tolerance

    Returns:
        PathGeometry with one subpath per move-to

    Raises:
        PathDataError: If the path data is malformed
    """
    if not path_data.strip():
        return PathGeometry()

    pen = RecordingPen()
    try:
        parse_path(path_data, pen)
    except (ValueError, IndexError) as e:
        raise PathDataError(path_data, str(e)) from e

    return PathGeometry(subpaths=tuple(_recording_to_subpaths(pen.value, tolerance)))


def _recording_to_subpaths(
    recording: list[tuple[str, tuple[Any, ...]]],
    tolerance: float,
) -> list[SubPath]:
    """Convert RecordingPen commands to subpaths.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), ..., (xn, yn)))
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))
    - ('closePath', ()) / ('endPath', ())

    Args:
        recording: Commands from RecordingPen.value
        tolerance: Curve flattening tolerance

    Returns:
        List of subpaths
    """
    subpaths: list[SubPath] = []
    current: list[Point] = []

    def finish(closed: bool) -> None:
        nonlocal current
        if not current:
            return
        points = current
        # The parser draws an explicit closing edge before closePath
        if closed and len(points) > 1 and points[-1] == points[0]:
            points = points[:-1]
        subpaths.append(SubPath(points=tuple(points), closed=closed))
        current = []

    for command, args in recording:
        if command == "moveTo":
            finish(closed=False)
            current = [Point(*args[0])]
        elif command == "lineTo":
            current.append(Point(*args[0]))
        elif command == "qCurveTo":
            for control, end in decomposeQuadraticSegment(args):
                start = current[-1]
                curve = flatten_quadratic([start, Point(*control), Point(*end)], tolerance)
                current.extend(curve[1:])
        elif command == "curveTo":
            for c1, c2, end in decomposeSuperBezierSegment(args):
                start = current[-1]
                curve = flatten_cubic([start, Point(*c1), Point(*c2), Point(*end)], tolerance)
                current.extend(curve[1:])
        elif command == "closePath":
            finish(closed=True)
        elif command == "endPath":
            finish(closed=False)

    finish(closed=False)
    return subpaths


def decode_alias(value: Any) -> str | None:
    """Decode a persisted private-use alias.

    Older projects store the alias as escaped text (``"\\uE061"``) rather
    than the character itself; both forms are accepted.
    """
    if not isinstance(value, str) or not value:
        return None
    if len(value) == 1:
        return value
    if value.lower().startswith("\\u"):
        try:
            return chr(int(value[2:], 16))
        except ValueError:
            return None
    return None


def layer_to_record(layer: Layer) -> dict[str, Any]:
    """Serialize a layer as a persisted stroke record."""
    if isinstance(layer, RasterLayer):
        return {
            "id": layer.id,
            "type": LayerType.IMAGE.value,
            "d": "",
            "imageUrl": layer.image_ref,
            "x": layer.x,
            "y": layer.y,
            "width": layer.width,
            "height": layer.height,
            "opacity": layer.opacity,
            "visible": layer.visible,
            "locked": layer.locked,
            "label": layer.label,
        }

    record: dict[str, Any] = {
        "id": layer.id,
        "type": LayerType.PATH.value,
        "d": geometry_to_path_data(layer.geometry),
        "strokeWidth": layer.stroke_width,
        "cap": layer.cap.value,
        "color": layer.color,
        "visible": layer.visible,
        "locked": layer.locked,
        "label": layer.label,
    }
    if layer.opacity is not None:
        record["opacity"] = layer.opacity
    return record


def record_to_layer(record: dict[str, Any]) -> Layer:
    """Deserialize a persisted stroke record.

    Raises:
        ProjectFormatError: If the record type is unknown
        PathDataError: If the path data is malformed
    """
    try:
        layer_type = LayerType(record.get("type", LayerType.PATH.value))
    except ValueError:
        raise ProjectFormatError(f"unknown stroke type {record.get('type')!r}") from None

    if layer_type is LayerType.IMAGE:
        return RasterLayer(
            id=record.get("id") or new_layer_id("img"),
            image_ref=record.get("imageUrl", ""),
            x=record.get("x", 0.0),
            y=record.get("y", 0.0),
            width=record.get("width", 0.0),
            height=record.get("height", 0.0),
            opacity=record.get("opacity", 1.0),
            visible=record.get("visible", True),
            locked=record.get("locked", False),
            label=record.get("label", "Image"),
        )

    return VectorLayer(
        id=record.get("id") or new_layer_id(),
        geometry=path_data_to_geometry(record.get("d", "")),
        stroke_width=record.get("strokeWidth") or 15.0,
        color=record.get("color") or "#ffffff",
        cap=LineCap(record.get("cap") or LineCap.ROUND.value),
        visible=record.get("visible", True),
        locked=record.get("locked", False),
        opacity=record.get("opacity"),
        label=record.get("label", "Layer"),
    )


def glyph_to_record(glyph: Glyph) -> dict[str, Any]:
    """Serialize a glyph as a persisted glyph record."""
    return {
        "char": glyph.character,
        "pua": glyph.alias,
        "strokes": [layer_to_record(layer) for layer in glyph.layers],
        "viewWidth": glyph.bounding_width,
    }


def record_to_glyph(
    record: dict[str, Any],
    canvas_size: float = 400.0,
    min_width: float = 50.0,
) -> Glyph:
    """Deserialize a persisted glyph record.

    Records without strokes get an empty base layer; a glyph-level
    ``imageUrl`` from older projects becomes a bottom raster layer. A
    missing ``viewWidth`` is derived from the layers.

    Raises:
        ProjectFormatError: If the record has no usable character
    """
    character = record.get("char")
    if not isinstance(character, str) or len(character) != 1:
        raise ProjectFormatError(f"glyph record has invalid char {character!r}")

    layers = [record_to_layer(stroke) for stroke in record.get("strokes") or []]

    image_url = record.get("imageUrl")
    if image_url and not any(isinstance(layer, RasterLayer) for layer in layers):
        layers.insert(
            0,
            RasterLayer(
                id=new_layer_id("img"),
                image_ref=image_url,
                width=canvas_size,
                height=canvas_size,
                opacity=LEGACY_IMAGE_OPACITY,
                label="Reference Image",
            ),
        )

    if not layers:
        layers = [VectorLayer(id=new_layer_id("layer-base"), label="Base Layer")]

    view_width = record.get("viewWidth")
    if view_width is None:
        view_width = glyph_bounding_width(layers, canvas_size=canvas_size, min_width=min_width)

    return Glyph(
        character=character,
        alias=decode_alias(record.get("pua")) or private_use_alias(character),
        layers=tuple(layers),
        bounding_width=float(view_width),
    )


def script_to_record(script: ScriptConfig) -> dict[str, Any]:
    """Serialize a script configuration as a persisted ``scriptConfig`` record."""
    return {
        "glyphs": [glyph_to_record(glyph) for glyph in script.glyph_set],
        "direction": script.direction.value,
        "spacingMode": script.spacing_mode.value,
    }


def record_to_script(
    record: dict[str, Any],
    canvas_size: float = 400.0,
    min_width: float = 50.0,
) -> ScriptConfig:
    """Deserialize a persisted ``scriptConfig`` record.

    Raises:
        ProjectFormatError: If the record is not a mapping or has bad values
    """
    if not isinstance(record, dict):
        raise ProjectFormatError("scriptConfig must be an object")

    try:
        direction = WritingDirection.parse(record.get("direction"))
        spacing_mode = SpacingMode(record.get("spacingMode") or SpacingMode.MONO.value)
    except ValueError as e:
        raise ProjectFormatError(str(e)) from e

    glyphs = [
        record_to_glyph(g, canvas_size=canvas_size, min_width=min_width)
        for g in record.get("glyphs") or []
    ]
    return ScriptConfig(
        glyph_set=GlyphSet(glyphs),
        direction=direction,
        spacing_mode=spacing_mode,
    )
