"""Exception hierarchy for Conscript."""


class ConscriptError(Exception):
    """Base exception for all Conscript errors."""

    pass


class ProjectError(ConscriptError):
    """Errors related to project loading or saving."""

    pass


class ProjectLoadError(ProjectError):
    """Error loading a project file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load project '{path}': {reason}")


class ProjectSaveError(ProjectError):
    """Error saving a project file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save project '{path}': {reason}")


class ProjectFormatError(ProjectError):
    """Project document does not have the expected structure."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid project format: {details}")


class PathDataError(ConscriptError):
    """SVG path data could not be parsed."""

    def __init__(self, path_data: str, reason: str) -> None:
        self.path_data = path_data
        self.reason = reason
        super().__init__(f"Invalid path data '{path_data[:40]}': {reason}")


class GlyphError(ConscriptError):
    """Errors related to glyph lookup or editing."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not present in the glyph set."""

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"Glyph for '{character}' not found in glyph set")


class LayerError(ConscriptError):
    """Errors related to layer management."""

    pass


class LayerNotFoundError(LayerError):
    """Referenced layer id does not exist in the session."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"Layer '{layer_id}' not found")


class LastLayerError(LayerError):
    """Deleting the layer would leave the glyph without layers."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"Cannot delete '{layer_id}': a glyph must keep at least one layer")
