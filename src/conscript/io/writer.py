"""Project writer for saving the script configuration of a project.

The script configuration is merged into the existing project document so
that data owned by other parts of the application (lexicon, grammar,
settings) is preserved.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from conscript.domain import ScriptConfig
from conscript.exceptions import ProjectSaveError
from conscript.io.converter import script_to_record
from conscript.io.reader import SCRIPT_CONFIG_KEY

logger = structlog.get_logger(__name__)


class ProjectWriter:
    """Writes script configurations into project files.

    Example:
        writer = ProjectWriter()
        writer.save(script, Path("project.json"))
    """

    def __init__(self, indent: int | None = 2) -> None:
        """Initialize the project writer.

        Args:
            indent: JSON indentation (None for compact output)
        """
        self.indent = indent

    def build_document(
        self,
        script: ScriptConfig,
        base_document: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build the project document to write.

        Args:
            script: Script configuration to store
            base_document: Existing document whose other keys are kept

        Returns:
            New document dictionary
        """
        document = dict(base_document or {})
        document[SCRIPT_CONFIG_KEY] = script_to_record(script)
        return document

    def save(self, script: ScriptConfig, output_path: Path) -> None:
        """Save the script configuration to a project file.

        If the file already holds a project object, only its
        ``scriptConfig`` member is replaced.

        Args:
            script: Script configuration to store
            output_path: Project file path

        Raises:
            ProjectSaveError: If the file cannot be read back or written
        """
        base: dict[str, Any] | None = None
        if output_path.exists():
            try:
                existing = json.loads(output_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise ProjectSaveError(str(output_path), f"existing file is not valid JSON: {e}") from e
            if isinstance(existing, dict):
                base = existing

        document = self.build_document(script, base)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                json.dumps(document, indent=self.indent, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise ProjectSaveError(str(output_path), str(e)) from e

        logger.debug("Project saved", path=str(output_path), glyphs=len(script.glyph_set))
