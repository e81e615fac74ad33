"""Logging utilities for Conscript."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import structlog


@dataclass
class SessionStats:
    """Statistics collected while editing glyphs."""

    glyphs_loaded: int = 0
    glyphs_saved: int = 0
    gestures: int = 0
    erases: int = 0
    layer_changes: int = 0
    undos: int = 0
    redos: int = 0
    discarded_sessions: int = 0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Console output goes to stderr so that command output on stdout stays
    machine-readable.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_conscript", False):
            root_logger.removeHandler(handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._conscript = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._conscript = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("conscript")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class SessionLogger:
    """Logger for glyph editing events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("conscript.session")
        self._stats = SessionStats()

    def log_glyph_loaded(self, character: str, layer_count: int, is_new: bool) -> None:
        """Log start of an edit session."""
        self._logger.debug(
            "Glyph loaded",
            character=character,
            layers=layer_count,
            new=is_new,
        )
        self._stats.glyphs_loaded += 1

    def log_glyph_saved(self, character: str, layer_count: int, bounding_width: float) -> None:
        """Log a glyph committed into the glyph set."""
        self._logger.info(
            "Glyph saved",
            character=character,
            layers=layer_count,
            bounding_width=round(bounding_width, 2),
        )
        self._stats.glyphs_saved += 1

    def log_session_discarded(self, character: str) -> None:
        """Log an edit session dropped with unsaved changes."""
        self._logger.warning("Discarding unsaved glyph edits", character=character)
        self._stats.discarded_sessions += 1

    def log_gesture(self, character: str, mode: str, layer_id: str | None, points: int) -> None:
        """Log a committed drawing gesture."""
        self._logger.debug(
            "Gesture committed",
            character=character,
            mode=mode,
            layer=layer_id,
            points=points,
        )
        self._stats.gestures += 1

    def log_gesture_ignored(self, character: str, mode: str, reason: str) -> None:
        """Log a gesture that had no effect."""
        self._logger.debug("Gesture ignored", character=character, mode=mode, reason=reason)

    def log_erase(self, character: str, removed_layers: list[str]) -> None:
        """Log an erase that removed geometry."""
        self._logger.debug(
            "Geometry erased",
            character=character,
            removed_layers=removed_layers,
        )
        self._stats.erases += 1

    def log_layer_change(self, character: str, action: str, layer_id: str) -> None:
        """Log a layer-management edit."""
        self._logger.debug("Layer changed", character=character, action=action, layer=layer_id)
        self._stats.layer_changes += 1

    def log_undo(self, character: str, depth: int) -> None:
        self._logger.debug("Undo", character=character, remaining=depth)
        self._stats.undos += 1

    def log_redo(self, character: str, depth: int) -> None:
        self._logger.debug("Redo", character=character, remaining=depth)
        self._stats.redos += 1

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats
