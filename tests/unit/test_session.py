"""Unit tests for the glyph edit session."""

from unittest.mock import MagicMock

import pytest

from conscript.config import BrushConfig, ConscriptSettings, HistoryConfig
from conscript.core.session import DIMMED_OPACITY, IMAGE_OPACITY, EditSession
from conscript.core.synthesizer import DrawMode
from conscript.domain import LineCap, PathGeometry, Point, RasterLayer, SubPath, VectorLayer
from conscript.exceptions import LastLayerError, LayerNotFoundError
from conscript.utils import SessionLogger


def _draw(session: EditSession, mode: DrawMode, start: Point, *moves: Point) -> None:
    session.draw_mode = mode
    session.begin_gesture(start)
    for point in moves:
        session.move_gesture(point)
    session.end_gesture()


@pytest.fixture
def session() -> EditSession:
    """Fresh session on an unknown character."""
    return EditSession("a")


class TestSessionSetup:
    """Tests for session initialization."""

    def test_new_glyph_has_base_layer(self, session: EditSession) -> None:
        """Test an empty glyph starts with one empty base layer."""
        assert len(session.layers) == 1
        base = session.layers[0]
        assert isinstance(base, VectorLayer)
        assert base.label == "Base Layer"
        assert base.id.startswith("layer-base-")
        assert session.active_layer_id == base.id
        assert not session.history.can_undo
        assert not session.dirty

    def test_existing_layers_select_top(self) -> None:
        """Test the top layer becomes active and lends its brush."""
        bottom = VectorLayer(id="bottom")
        top = VectorLayer(id="top", stroke_width=4.0, color="#ff0000")
        session = EditSession("b", layers=[bottom, top])

        assert session.active_layer_id == "top"
        assert session.stroke_width == 4.0
        assert session.color == "#ff0000"

    def test_brush_from_settings(self) -> None:
        """Test brush defaults come from settings."""
        settings = ConscriptSettings(brush=BrushConfig(stroke_width=8.0, eraser_size=30.0))
        session = EditSession("c", settings=settings)
        # Selecting the base layer adopts its width, which was created from the brush
        assert session.stroke_width == 8.0
        assert session.eraser_radius == 30.0


class TestGestures:
    """Tests for drawing gestures."""

    def test_freehand_appends_to_active_layer(self, session: EditSession) -> None:
        """Test strokes extend the active layer."""
        base_id = session.active_layer_id
        _draw(session, DrawMode.FREE, Point(10, 10), Point(20, 20), Point(30, 10))
        _draw(session, DrawMode.LINE, Point(0, 100), Point(50, 50), Point(100, 100))

        assert len(session.layers) == 1
        layer = session.get_layer(base_id)
        assert isinstance(layer, VectorLayer)
        assert len(layer.geometry.subpaths) == 2
        assert layer.geometry.subpaths[1].points == (Point(0, 100), Point(100, 100))
        assert session.history.undo_depth == 2
        assert session.dirty

    def test_stroke_restyles_active_layer(self, session: EditSession) -> None:
        """Test committing a stroke applies the current brush to the layer."""
        session.stroke_width = 3.0
        session.color = "#00ff00"
        session.cap = LineCap.SQUARE
        _draw(session, DrawMode.FREE, Point(0, 0), Point(5, 5))

        layer = session.active_layer
        assert isinstance(layer, VectorLayer)
        assert layer.stroke_width == 3.0
        assert layer.color == "#00ff00"
        assert layer.cap is LineCap.SQUARE

    def test_shapes_create_new_layers(self, session: EditSession) -> None:
        """Test rectangles and circles always get their own layer."""
        _draw(session, DrawMode.RECT, Point(100, 100), Point(300, 150))
        _draw(session, DrawMode.CIRCLE, Point(200, 200), Point(250, 200))

        labels = [layer.label for layer in session.layers]
        assert labels == ["Base Layer", "Rectangle 2", "Circle 3"]
        assert session.active_layer_id == session.layers[-1].id

    def test_locked_layer_is_noop(self, session: EditSession) -> None:
        """Test drawing on a locked layer leaves state and history alone."""
        session.toggle_lock(session.active_layer_id)
        depth = session.history.undo_depth
        before = session.layers

        session.draw_mode = DrawMode.FREE
        assert session.begin_gesture(Point(0, 0)) is False
        assert session.move_gesture(Point(10, 10)) is False
        assert session.end_gesture() is None

        assert session.layers == before
        assert session.history.undo_depth == depth

    def test_raster_layer_is_noop(self, session: EditSession) -> None:
        """Test drawing while an image layer is active is ignored."""
        session.import_image("data:image/png;base64,AAAA")
        depth = session.history.undo_depth
        _draw(session, DrawMode.RECT, Point(0, 0), Point(10, 10))
        assert len(session.layers) == 2
        assert session.history.undo_depth == depth

    def test_move_without_begin_ignored(self, session: EditSession) -> None:
        """Test stray moves and ends are discarded."""
        assert session.move_gesture(Point(1, 1)) is False
        assert session.end_gesture() is None
        assert not session.history.can_undo

    def test_cancel_gesture(self, session: EditSession) -> None:
        """Test a cancelled gesture commits nothing and leaves no undo step."""
        session.draw_mode = DrawMode.LINE
        session.begin_gesture(Point(0, 0))
        assert session.is_drawing
        assert session.history.can_undo
        session.cancel_gesture()
        assert not session.is_drawing
        assert session.end_gesture() is None
        assert session.layers[0].is_empty()
        assert not session.history.can_undo
        assert not session.dirty

    def test_cancel_keeps_earlier_edits(self, session: EditSession) -> None:
        """Test cancelling only drops the cancelled gesture's snapshot."""
        _draw(session, DrawMode.LINE, Point(0, 0), Point(100, 0))
        depth = session.history.undo_depth
        session.begin_gesture(Point(0, 50))
        session.cancel_gesture()
        assert session.history.undo_depth == depth
        assert session.dirty

    def test_cancel_erase_rolls_back(self, session: EditSession) -> None:
        """Test a cancelled eraser gesture restores what it removed."""
        _draw(session, DrawMode.LINE, Point(0, 0), Point(100, 0))
        before = session.layers
        depth = session.history.undo_depth

        session.draw_mode = DrawMode.ERASER
        session.begin_gesture(Point(50, 0))
        assert session.layers != before
        session.cancel_gesture()

        assert session.layers == before
        assert session.history.undo_depth == depth

    def test_gestures_are_logged(self) -> None:
        """Test committed gestures reach the session logger."""
        events = SessionLogger(logger=MagicMock())
        session = EditSession("a", session_logger=events)
        _draw(session, DrawMode.LINE, Point(0, 0), Point(10, 0))
        assert events.stats.gestures == 1


class TestErasing:
    """Tests for erasing within a session."""

    def test_eraser_gesture_records_once(self, session: EditSession) -> None:
        """Test one eraser gesture is one undo step."""
        _draw(session, DrawMode.FREE, *(Point(x, 0) for x in range(0, 101, 10)))
        depth = session.history.undo_depth

        session.stroke_width = 10.0
        _draw(session, DrawMode.ERASER, Point(20, 0), Point(50, 0), Point(80, 0))

        assert session.history.undo_depth == depth + 1
        layer = session.layers[0]
        assert isinstance(layer, VectorLayer)
        assert len(layer.geometry.subpaths) == 4

    def test_eraser_without_hits_records_nothing(self, session: EditSession) -> None:
        """Test an eraser gesture that removes nothing is not an edit."""
        _draw(session, DrawMode.FREE, Point(0, 0), Point(10, 0))
        depth = session.history.undo_depth
        _draw(session, DrawMode.ERASER, Point(200, 200), Point(210, 210))
        assert session.history.undo_depth == depth

    def test_erasing_everything_keeps_last_layer(self, session: EditSession) -> None:
        """Test the only layer survives with empty geometry."""
        _draw(session, DrawMode.LINE, Point(0, 0), Point(4, 0))
        assert session.erase_at(Point(2, 0), radius=20)
        assert len(session.layers) == 1
        assert session.layers[0].is_empty()
        assert session.active_layer is not None

    def test_erased_layer_removed_and_active_falls_back(self) -> None:
        """Test a fully erased active layer is removed from a larger stack."""
        keep = VectorLayer(
            id="keep",
            geometry=PathGeometry(subpaths=(SubPath(points=(Point(0, 300), Point(100, 300))),)),
        )
        doomed = VectorLayer(
            id="doomed",
            geometry=PathGeometry(subpaths=(SubPath(points=(Point(0, 0), Point(4, 0))),)),
        )
        session = EditSession("d", layers=[keep, doomed])

        assert session.erase_at(Point(2, 0), radius=20)
        assert [layer.id for layer in session.layers] == ["keep"]
        assert session.active_layer_id == "keep"


class TestLayerManagement:
    """Tests for layer operations."""

    def test_add_and_delete(self, session: EditSession) -> None:
        """Test adding and deleting layers."""
        layer = session.add_layer()
        assert layer.label == "New Layer 2"
        assert layer.id.startswith("layer-man-")
        assert session.active_layer_id == layer.id

        session.delete_layer(layer.id)
        assert len(session.layers) == 1

    def test_delete_last_layer_raises(self, session: EditSession) -> None:
        """Test the last layer cannot be deleted and nothing is recorded."""
        with pytest.raises(LastLayerError):
            session.delete_layer(session.active_layer_id)
        assert len(session.layers) == 1
        assert not session.history.can_undo

    def test_unknown_layer(self, session: EditSession) -> None:
        """Test unknown ids raise LayerNotFoundError."""
        with pytest.raises(LayerNotFoundError):
            session.rename_layer("missing", "x")
        with pytest.raises(LayerNotFoundError):
            session.select_layer("missing")

    def test_move_layer(self, session: EditSession) -> None:
        """Test reordering within bounds."""
        base_id = session.layers[0].id
        top = session.add_layer()

        assert session.move_layer(top.id, "up") is False
        assert session.move_layer(top.id, "down") is True
        assert [layer.id for layer in session.layers] == [top.id, base_id]
        assert session.move_layer(top.id, "down") is False

    def test_toggles(self, session: EditSession) -> None:
        """Test visibility, lock and opacity toggles."""
        layer_id = session.active_layer_id
        assert session.toggle_visibility(layer_id) is False
        assert session.toggle_lock(layer_id) is True
        assert session.toggle_opacity(layer_id) == DIMMED_OPACITY
        assert session.toggle_opacity(layer_id) == 1.0

        layer = session.get_layer(layer_id)
        assert not layer.visible
        assert layer.locked

    def test_import_image_at_bottom(self, session: EditSession) -> None:
        """Test imported images sit below the artwork."""
        image = session.import_image("data:image/png;base64,AAAA")
        assert session.layers[0] is image
        assert isinstance(image, RasterLayer)
        assert image.opacity == IMAGE_OPACITY
        assert image.width == image.height == 400.0

    def test_select_is_not_an_edit(self, session: EditSession) -> None:
        """Test selection changes the brush but not the history."""
        styled = session.add_layer()
        session.set_stroke_width(30.0)
        depth = session.history.undo_depth

        session.select_layer(session.layers[0].id)
        assert session.stroke_width == 15.0
        session.select_layer(styled.id)
        assert session.stroke_width == 30.0
        assert session.history.undo_depth == depth

    def test_rename(self, session: EditSession) -> None:
        """Test renaming a layer."""
        session.rename_layer(session.active_layer_id, "Stem")
        assert session.active_layer.label == "Stem"


class TestUndoRedo:
    """Tests for undo and redo through the session."""

    def test_undo_redo_inverse(self, session: EditSession) -> None:
        """Test undo followed by redo restores the same stack."""
        _draw(session, DrawMode.FREE, Point(0, 0), Point(10, 10))
        _draw(session, DrawMode.RECT, Point(50, 50), Point(80, 90))
        after = session.layers

        assert session.undo()
        assert len(session.layers) == 1
        assert session.redo()
        assert session.layers == after

    def test_undo_restores_deleted_layer(self, session: EditSession) -> None:
        """Test deleting then undoing brings the layer back in place."""
        added = session.add_layer()
        before = session.layers
        session.delete_layer(added.id)
        session.undo()
        assert session.layers == before

    def test_undo_empty_is_noop(self, session: EditSession) -> None:
        """Test undo and redo without history return False."""
        assert session.undo() is False
        assert session.redo() is False

    def test_active_layer_falls_back_after_undo(self, session: EditSession) -> None:
        """Test the active id is repaired when undo removes the active layer."""
        added = session.add_layer()
        assert session.active_layer_id == added.id
        session.undo()
        assert session.active_layer_id == session.layers[-1].id

    def test_new_edit_clears_redo(self, session: EditSession) -> None:
        """Test redo is invalidated by a new edit."""
        session.add_layer()
        session.undo()
        session.add_layer()
        assert session.redo() is False

    def test_bounded_history(self) -> None:
        """Test max_depth limits undo steps."""
        settings = ConscriptSettings(history=HistoryConfig(max_depth=2))
        session = EditSession("e", settings=settings)
        for _ in range(5):
            session.add_layer()
        assert session.undo()
        assert session.undo()
        assert not session.undo()
        assert len(session.layers) == 4
