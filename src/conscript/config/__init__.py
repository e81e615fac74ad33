"""Configuration management for conscript.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CanvasConfig: Authoring canvas metrics
- BrushConfig: Initial brush and eraser settings
- ShapeConfig: Shape tool tessellation
- LayoutConfig: Text layout metrics
- HistoryConfig: Undo/redo limits
- LoggingConfig: Logging settings
- ConscriptSettings: Main application settings
"""

from conscript.config.settings import (
    BrushConfig,
    CanvasConfig,
    ConscriptSettings,
    HistoryConfig,
    LayoutConfig,
    LoggingConfig,
    ShapeConfig,
    get_default_settings,
)

__all__ = [
    "BrushConfig",
    "CanvasConfig",
    "ConscriptSettings",
    "HistoryConfig",
    "LayoutConfig",
    "LoggingConfig",
    "ShapeConfig",
    "get_default_settings",
]
