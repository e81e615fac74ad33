"""Configuration settings for Conscript."""

from pathlib import Path

from pydantic import BaseModel, Field

from conscript.domain.layer import LineCap


class CanvasConfig(BaseModel):
    """Authoring canvas dimensions.

    Glyphs are drawn on a square canvas; proportional advances are measured
    relative to its size.
    """

    size: float = Field(
        default=400.0,
        gt=0.0,
        description="Width and height of the square authoring canvas",
    )
    min_glyph_width: float = Field(
        default=50.0,
        ge=0.0,
        description="Lower clamp for a glyph's derived bounding width",
    )


class BrushConfig(BaseModel):
    """Initial brush state for new edit sessions."""

    stroke_width: float = Field(
        default=15.0,
        gt=0.0,
        le=200.0,
        description="Stroke width applied to drawn paths",
    )
    color: str = Field(
        default="#ffffff",
        description="Stroke color applied to drawn paths",
    )
    cap: LineCap = Field(
        default=LineCap.ROUND,
        description="Line cap applied to drawn paths",
    )
    eraser_size: float | None = Field(
        default=None,
        gt=0.0,
        description="Eraser diameter (None = use the current stroke width)",
    )


class ShapeConfig(BaseModel):
    """Tessellation constants for the shape tools."""

    rect_step: float = Field(
        default=5.0,
        gt=0.0,
        description="Sub-segment length used along rectangle edges",
    )
    circle_segments: int = Field(
        default=32,
        ge=3,
        le=360,
        description="Number of sides of the polygon approximating a circle",
    )


class LayoutConfig(BaseModel):
    """Metrics used by the layout engine, in units of the unit cell."""

    unit: float = Field(
        default=1.0,
        gt=0.0,
        description="Size of one unit cell",
    )
    blank_fraction: float = Field(
        default=0.25,
        gt=0.0,
        le=1.0,
        description="Advance of a space, as a fraction of the unit cell",
    )
    notdef_fraction: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Advance of the not-defined fallback in proportional mode",
    )
    line_gap: float = Field(
        default=0.0,
        ge=0.0,
        description="Extra space between lines, as a fraction of the unit cell",
    )


class HistoryConfig(BaseModel):
    """Undo/redo configuration."""

    max_depth: int | None = Field(
        default=None,
        ge=1,
        description="Maximum undo snapshots kept per session (None = unbounded)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ConscriptSettings(BaseModel):
    """Main application settings."""

    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    brush: BrushConfig = Field(default_factory=BrushConfig)
    shapes: ShapeConfig = Field(default_factory=ShapeConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ConscriptSettings:
    """Get default application settings."""
    return ConscriptSettings()
