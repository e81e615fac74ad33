"""Project reader for loading the script configuration of a project.

This module provides the ProjectReader class for loading project JSON
files and extracting the script configuration into domain models.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from conscript.domain import ScriptConfig
from conscript.exceptions import ConscriptError, ProjectLoadError
from conscript.io.converter import record_to_script

SCRIPT_CONFIG_KEY = "scriptConfig"

logger = structlog.get_logger(__name__)


class ProjectReader:
    """Loads project files and extracts the script configuration.

    A project document is a JSON object whose ``scriptConfig`` member holds
    the glyphs, direction and spacing mode. A document that is itself a
    script configuration (has ``glyphs`` at the top level) is accepted too.

    Example:
        with ProjectReader(Path("project.json")) as reader:
            script = reader.script
    """

    def __init__(self, project_path: Path, canvas_size: float = 400.0, min_width: float = 50.0) -> None:
        """Initialize the project reader.

        Args:
            project_path: Path to the project JSON file
            canvas_size: Canvas size used when deriving missing glyph widths
            min_width: Minimum glyph width used when deriving missing widths
        """
        self._project_path = project_path
        self._canvas_size = canvas_size
        self._min_width = min_width
        self._document: dict[str, Any] | None = None
        self._script: ScriptConfig | None = None

    def load(self) -> None:
        """Load and parse the project file.

        Raises:
            FileNotFoundError: If the project file does not exist
            ProjectLoadError: If the file is not a valid project
        """
        if not self._project_path.exists():
            raise FileNotFoundError(f"Project file not found: {self._project_path}")

        try:
            document = json.loads(self._project_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProjectLoadError(str(self._project_path), str(e)) from e

        if not isinstance(document, dict):
            raise ProjectLoadError(str(self._project_path), "top-level JSON value must be an object")

        record = document.get(SCRIPT_CONFIG_KEY)
        if record is None:
            record = document if "glyphs" in document else {}

        try:
            self._script = record_to_script(
                record,
                canvas_size=self._canvas_size,
                min_width=self._min_width,
            )
        except (ConscriptError, ValueError, TypeError, KeyError) as e:
            raise ProjectLoadError(str(self._project_path), str(e)) from e

        self._document = document
        logger.debug(
            "Project loaded",
            path=str(self._project_path),
            glyphs=len(self._script.glyph_set),
            direction=self._script.direction.value,
        )

    @property
    def script(self) -> ScriptConfig:
        """Return the loaded script configuration.

        Raises:
            RuntimeError: If the project has not been loaded yet
        """
        if self._script is None:
            raise RuntimeError("Project not loaded. Call load() first.")
        return self._script

    @property
    def document(self) -> dict[str, Any]:
        """Return the raw project document.

        Raises:
            RuntimeError: If the project has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("Project not loaded. Call load() first.")
        return self._document

    @property
    def glyph_count(self) -> int:
        return len(self.script.glyph_set)

    def close(self) -> None:
        """Release the loaded document."""
        self._document = None
        self._script = None

    def __enter__(self) -> "ProjectReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
