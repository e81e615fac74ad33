"""Project I/O layer for conscript.

This module handles reading and writing project files. It provides a
clean abstraction layer between the persisted JSON format and the domain
models.

Key responsibilities:
- Load the script configuration from a project document
- Convert SVG path data to and from vector geometry (via fonttools)
- Write the script configuration back without disturbing other data

Key classes:
- ProjectReader: Load projects and extract the script configuration
- ProjectWriter: Save the script configuration into a project
"""

from conscript.io.reader import ProjectReader
from conscript.io.writer import ProjectWriter

__all__ = [
    "ProjectReader",
    "ProjectWriter",
]
