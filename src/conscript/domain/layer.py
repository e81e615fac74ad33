"""Layer types composing a glyph's artwork.

A glyph is painted from an ordered stack of layers. Two kinds exist:
- VectorLayer: stroked path geometry
- RasterLayer: an opaque image reference placed on the canvas

Layers are frozen values; editing produces a new layer via ``replace``.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from conscript.domain.path import PathGeometry


class LineCap(str, Enum):
    """Stroke end cap style."""

    ROUND = "round"
    SQUARE = "square"


class LayerType(str, Enum):
    """Persisted layer type tag."""

    PATH = "path"
    IMAGE = "image"


def new_layer_id(prefix: str = "layer") -> str:
    """Generate a layer id that is unique within any glyph.

    Args:
        prefix: Human-readable prefix

    Returns:
        Id of the form ``{prefix}-{12 hex digits}``
    """
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class VectorLayer:
    """A stroked path layer.

    Attributes:
        id: Stable layer id
        geometry: Path geometry drawn by this layer
        stroke_width: Stroke width in canvas units
        color: Stroke color (CSS color string)
        cap: Stroke end cap
        visible: Whether the layer is painted
        locked: Locked layers ignore drawing and erasing
        opacity: Optional opacity override (None = fully opaque)
        label: Display label
    """

    id: str
    geometry: PathGeometry = field(default_factory=PathGeometry)
    stroke_width: float = 15.0
    color: str = "#ffffff"
    cap: LineCap = LineCap.ROUND
    visible: bool = True
    locked: bool = False
    opacity: float | None = None
    label: str = "Layer"

    layer_type = LayerType.PATH

    def is_empty(self) -> bool:
        """Check if the layer has no geometry."""
        return self.geometry.is_empty()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the layer
        """
        return {
            "type": self.layer_type.value,
            "id": self.id,
            "geometry": self.geometry.to_dict(),
            "stroke_width": self.stroke_width,
            "color": self.color,
            "cap": self.cap.value,
            "visible": self.visible,
            "locked": self.locked,
            "opacity": self.opacity,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorLayer":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a vector layer

        Returns:
            VectorLayer instance
        """
        return cls(
            id=data["id"],
            geometry=PathGeometry.from_dict(data["geometry"]),
            stroke_width=data.get("stroke_width", 15.0),
            color=data.get("color", "#ffffff"),
            cap=LineCap(data.get("cap", LineCap.ROUND.value)),
            visible=data.get("visible", True),
            locked=data.get("locked", False),
            opacity=data.get("opacity"),
            label=data.get("label", "Layer"),
        )


@dataclass(frozen=True)
class RasterLayer:
    """An image placed on the canvas.

    The image itself is never decoded; ``image_ref`` is whatever reference
    (usually a data URI) the importing collaborator supplied.

    Attributes:
        id: Stable layer id
        image_ref: Opaque image reference
        x: Left edge in canvas units
        y: Top edge in canvas units
        width: Width in canvas units
        height: Height in canvas units
        opacity: Opacity in [0, 1]
        visible: Whether the layer is painted
        locked: Locked flag
        label: Display label
    """

    id: str
    image_ref: str
    x: float = 0.0
    y: float = 0.0
    width: float = 400.0
    height: float = 400.0
    opacity: float = 1.0
    visible: bool = True
    locked: bool = False
    label: str = "Image"

    layer_type = LayerType.IMAGE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.layer_type.value,
            "id": self.id,
            "image_ref": self.image_ref,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "opacity": self.opacity,
            "visible": self.visible,
            "locked": self.locked,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RasterLayer":
        return cls(
            id=data["id"],
            image_ref=data["image_ref"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            width=data.get("width", 400.0),
            height=data.get("height", 400.0),
            opacity=data.get("opacity", 1.0),
            visible=data.get("visible", True),
            locked=data.get("locked", False),
            label=data.get("label", "Image"),
        )


Layer = VectorLayer | RasterLayer


def layer_from_dict(data: dict[str, Any]) -> Layer:
    """Create a layer from its serialized form, dispatching on ``type``.

    Args:
        data: Serialized layer

    Returns:
        VectorLayer or RasterLayer instance

    Raises:
        ValueError: If the type tag is unknown
    """
    layer_type = LayerType(data.get("type", LayerType.PATH.value))
    if layer_type is LayerType.IMAGE:
        return RasterLayer.from_dict(data)
    return VectorLayer.from_dict(data)
