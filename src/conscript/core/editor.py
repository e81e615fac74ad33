"""Script editor: the entry and exit points of glyph editing.

The ScriptEditor owns the document's ScriptConfig. It opens edit sessions
on glyphs, commits saved sessions back into the glyph set, applies the
direction and spacing toggles, and renders text with the current script.
"""

from conscript.config import ConscriptSettings, get_default_settings
from conscript.core.geometry import glyph_bounding_width
from conscript.core.layout import render_text
from conscript.core.session import EditSession
from conscript.domain import (
    Glyph,
    GlyphSet,
    LayoutResult,
    ScriptConfig,
    SpacingMode,
    WritingDirection,
    private_use_alias,
)
from conscript.exceptions import GlyphNotFoundError
from conscript.utils import SessionLogger


class ScriptEditor:
    """Edits the glyphs of one open document.

    The script configuration is replaced as a whole on every commit, so a
    layout computed from ``editor.script`` always sees a consistent glyph
    set.

    Example:
        editor = ScriptEditor(ScriptConfig())
        session = editor.load_glyph("a")
        ...  # draw into the session
        editor.save_glyph(session)
        result = editor.render_text("aa")
    """

    def __init__(
        self,
        script: ScriptConfig | None = None,
        settings: ConscriptSettings | None = None,
        session_logger: SessionLogger | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            script: Document script configuration (empty if None)
            settings: Application settings (defaults if None)
            session_logger: Event logger shared with the sessions it opens
        """
        self.script = script or ScriptConfig()
        self.settings = settings or get_default_settings()
        self.events = session_logger or SessionLogger()
        self.session: EditSession | None = None

    def load_glyph(self, character: str) -> EditSession:
        """Open an edit session on the glyph for ``character``.

        An existing glyph's layers are copied into the session; an unknown
        character starts with one empty base layer. Any previously open
        session is discarded without saving.

        Args:
            character: Character to edit

        Returns:
            New EditSession with empty history
        """
        if len(character) != 1:
            raise ValueError(f"Expected a single character, got {character!r}")

        if self.session is not None and self.session.dirty:
            self.events.log_session_discarded(self.session.character)

        glyph = self.script.glyph_set.get(character)
        layers = glyph.layers if glyph is not None else ()
        self.session = EditSession(
            character,
            layers=layers,
            settings=self.settings,
            session_logger=self.events,
        )
        self.events.log_glyph_loaded(character, len(self.session.layers), is_new=glyph is None)
        return self.session

    def save_glyph(self, session: EditSession) -> GlyphSet:
        """Commit a session's layers into the glyph set.

        The bounding width is derived here, once per save. Saving a session
        without any visible geometry is allowed and yields a blank glyph.

        Args:
            session: Session to commit

        Returns:
            The new glyph set, also installed in ``self.script``
        """
        layers = session.layers
        canvas = self.settings.canvas
        glyph = Glyph(
            character=session.character,
            alias=private_use_alias(session.character),
            layers=layers,
            bounding_width=glyph_bounding_width(
                layers, canvas_size=canvas.size, min_width=canvas.min_glyph_width
            ),
        )
        glyph_set = self.script.glyph_set.with_glyph(glyph)
        self.script = self.script.with_glyph_set(glyph_set)
        session.mark_clean()
        self.events.log_glyph_saved(glyph.character, len(layers), glyph.bounding_width)
        return glyph_set

    def get_glyph(self, character: str) -> Glyph:
        """Resolve a glyph by literal character or private-use alias.

        Raises:
            GlyphNotFoundError: If the glyph set has no such glyph
        """
        glyph = self.script.glyph_set.lookup(character)
        if glyph is None:
            raise GlyphNotFoundError(character)
        return glyph

    def delete_glyph(self, character: str) -> GlyphSet:
        """Remove the glyph for ``character`` from the glyph set.

        Raises:
            GlyphNotFoundError: If the glyph set has no such glyph
        """
        if self.script.glyph_set.get(character) is None:
            raise GlyphNotFoundError(character)
        glyph_set = self.script.glyph_set.without(character)
        self.script = self.script.with_glyph_set(glyph_set)
        return glyph_set

    def set_direction(self, direction: WritingDirection) -> ScriptConfig:
        self.script = self.script.with_direction(direction)
        return self.script

    def set_spacing_mode(self, spacing_mode: SpacingMode) -> ScriptConfig:
        self.script = self.script.with_spacing_mode(spacing_mode)
        return self.script

    def toggle_spacing_mode(self) -> ScriptConfig:
        """Switch between proportional and mono spacing."""
        return self.set_spacing_mode(self.script.spacing_mode.toggled())

    def render_text(self, text: str) -> LayoutResult:
        """Lay out ``text`` with the current script configuration."""
        return render_text(
            text,
            self.script,
            layout=self.settings.layout,
            canvas=self.settings.canvas,
        )
