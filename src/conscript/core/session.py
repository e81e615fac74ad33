"""Edit session for one glyph's working copy.

An EditSession owns the layers of the glyph being edited, the active layer,
the brush state, the gesture in progress and the undo/redo history. Layers
live in an arena keyed by stable id with a separate ordering list, so that
reordering and undo never invalidate the active layer id.

Every mutation pushes the pre-mutation stack onto the history first.
Gestures targeting a locked or raster active layer are ignored without
touching the history.
"""

from collections.abc import Iterable
from dataclasses import replace
from typing import Literal

from conscript.config import ConscriptSettings, get_default_settings
from conscript.core.eraser import erase_layers
from conscript.core.history import LayerHistory, Snapshot
from conscript.core.synthesizer import DrawMode, Gesture
from conscript.domain import (
    Layer,
    LineCap,
    PathGeometry,
    Point,
    RasterLayer,
    VectorLayer,
    new_layer_id,
)
from conscript.exceptions import LastLayerError, LayerNotFoundError
from conscript.utils import SessionLogger

# Opacity used when a layer is dimmed with toggle_opacity
DIMMED_OPACITY = 0.4
# Opacity of freshly imported reference images
IMAGE_OPACITY = 0.5


class EditSession:
    """Working copy of one glyph's layer stack.

    Example:
        session = EditSession("a")
        session.draw_mode = DrawMode.LINE
        session.begin_gesture(Point(10, 10))
        session.move_gesture(Point(90, 90))
        session.end_gesture()
        session.undo()
    """

    def __init__(
        self,
        character: str,
        layers: Iterable[Layer] | None = None,
        settings: ConscriptSettings | None = None,
        session_logger: SessionLogger | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            character: Character whose glyph is edited
            layers: Existing layer stack; a single empty base layer if empty
            settings: Application settings (defaults if None)
            session_logger: Event logger (a default one if None)
        """
        self.character = character
        self.settings = settings or get_default_settings()
        self.events = session_logger or SessionLogger()

        brush = self.settings.brush
        self.stroke_width: float = brush.stroke_width
        self.color: str = brush.color
        self.cap: LineCap = brush.cap
        self.eraser_size: float | None = brush.eraser_size
        self.draw_mode: DrawMode = DrawMode.FREE

        self.history = LayerHistory(max_depth=self.settings.history.max_depth)
        self.dirty = False

        self._layers: dict[str, Layer] = {}
        self._order: list[str] = []
        self._gesture: Gesture | None = None
        self._gesture_recorded = False
        self._dirty_before_gesture = False

        initial = list(layers or ())
        if not initial:
            initial = [self._new_vector_layer("Base Layer", prefix="layer-base")]
        self._restore(initial)
        self.active_layer_id: str | None = None
        self.select_layer(self._order[-1])

    # ------------------------------------------------------------------
    # Layer stack access

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Layers in paint order (bottom first)."""
        return tuple(self._layers[layer_id] for layer_id in self._order)

    @property
    def active_layer(self) -> Layer | None:
        if self.active_layer_id is None:
            return None
        return self._layers.get(self.active_layer_id)

    @property
    def is_drawing(self) -> bool:
        """True while a gesture is in progress."""
        return self._gesture is not None

    @property
    def eraser_radius(self) -> float:
        """Eraser size in effect: the explicit eraser size or the stroke width."""
        return self.eraser_size if self.eraser_size is not None else self.stroke_width

    def get_layer(self, layer_id: str) -> Layer:
        """Get a layer by id.

        Raises:
            LayerNotFoundError: If no layer has this id
        """
        try:
            return self._layers[layer_id]
        except KeyError:
            raise LayerNotFoundError(layer_id) from None

    def index_of(self, layer_id: str) -> int:
        """Position of a layer in paint order."""
        self.get_layer(layer_id)
        return self._order.index(layer_id)

    def snapshot(self) -> Snapshot:
        """Capture the current layer stack."""
        return self.layers

    def mark_clean(self) -> None:
        """Mark the working copy as saved."""
        self.dirty = False

    def _restore(self, layers: Iterable[Layer]) -> None:
        self._layers = {}
        self._order = []
        for layer in layers:
            self._layers[layer.id] = layer
            self._order.append(layer.id)

    def _record(self) -> None:
        self.history.push(self.snapshot())
        self.dirty = True

    def _put(self, layer: Layer) -> None:
        self._layers[layer.id] = layer

    def _new_vector_layer(self, label: str, prefix: str = "layer") -> VectorLayer:
        return VectorLayer(
            id=new_layer_id(prefix),
            stroke_width=self.stroke_width,
            color=self.color,
            cap=self.cap,
            label=label,
        )

    # ------------------------------------------------------------------
    # Gestures

    def _blocked_reason(self) -> str | None:
        layer = self.active_layer
        if layer is None:
            return None
        if layer.locked:
            return "active layer is locked"
        if isinstance(layer, RasterLayer):
            return "active layer is an image"
        return None

    def begin_gesture(self, point: Point) -> bool:
        """Start a pointer gesture with the current draw mode.

        Drawing tools snapshot the stack immediately. The eraser erases at
        the start point and only snapshots once it actually removes geometry.

        Args:
            point: Pointer position

        Returns:
            True if the gesture started, False if it was ignored
        """
        reason = self._blocked_reason()
        if reason is not None:
            self.events.log_gesture_ignored(self.character, self.draw_mode.value, reason)
            return False

        self._gesture = Gesture(mode=self.draw_mode, start=point)
        self._gesture_recorded = False
        self._dirty_before_gesture = self.dirty

        if self.draw_mode is DrawMode.ERASER:
            self._erase_in_gesture(point)
        else:
            self._record()
            self._gesture_recorded = True
        return True

    def move_gesture(self, point: Point) -> bool:
        """Feed a pointer move into the gesture in progress.

        Moves without a started gesture are discarded.

        Returns:
            True if the move was used
        """
        if self._gesture is None:
            return False
        self._gesture.add(point)
        if self._gesture.mode is DrawMode.ERASER:
            self._erase_in_gesture(point)
        return True

    def end_gesture(self) -> Layer | None:
        """Finish the gesture in progress and commit its geometry.

        Freehand and line strokes extend the active vector layer (which also
        takes on the current brush style); without a usable active layer a
        new layer is created. Rectangles and circles always become a new
        layer, which is then made active.

        Returns:
            The layer that received geometry, or None
        """
        gesture = self._gesture
        self._gesture = None
        if gesture is None or gesture.mode is DrawMode.ERASER:
            return None

        subpath = gesture.to_subpath(
            rect_step=self.settings.shapes.rect_step,
            circle_segments=self.settings.shapes.circle_segments,
        )
        if subpath is None:
            return None

        active = self.active_layer
        if (
            gesture.mode.is_stroke
            and isinstance(active, VectorLayer)
            and not active.locked
        ):
            layer: Layer = replace(
                active,
                geometry=active.geometry.append(subpath),
                stroke_width=self.stroke_width,
                color=self.color,
                cap=self.cap,
            )
            self._put(layer)
        else:
            count = len(self._order) + 1
            if gesture.mode is DrawMode.RECT:
                label = f"Rectangle {count}"
            elif gesture.mode is DrawMode.CIRCLE:
                label = f"Circle {count}"
            else:
                label = f"Layer {count}"
            layer = replace(
                self._new_vector_layer(label),
                geometry=PathGeometry(subpaths=(subpath,)),
            )
            self._put(layer)
            self._order.append(layer.id)
            self.active_layer_id = layer.id

        self.events.log_gesture(self.character, gesture.mode.value, layer.id, len(subpath.points))
        return layer

    def cancel_gesture(self) -> None:
        """Abandon the gesture in progress without committing geometry.

        The snapshot taken for the gesture is dropped and the stack it holds
        is restored, which also rolls back anything an eraser gesture removed.
        """
        gesture = self._gesture
        self._gesture = None
        if gesture is None or not self._gesture_recorded:
            return
        self._gesture_recorded = False
        before = self.history.discard_last()
        if before is None:
            return
        self._restore(before)
        if self.active_layer_id not in self._layers:
            self.active_layer_id = self._order[-1]
        self.dirty = self._dirty_before_gesture

    def _erase_in_gesture(self, point: Point) -> None:
        result = erase_layers(self.layers, point, self.eraser_radius)
        if not result.changed:
            return
        if not self._gesture_recorded:
            self._record()
            self._gesture_recorded = True
        self._apply_erase(result.layers, result.removed_ids)

    def erase_at(self, point: Point, radius: float | None = None) -> bool:
        """Erase once at ``point`` outside of a gesture.

        Args:
            point: Erase point
            radius: Eraser size (defaults to ``eraser_radius``)

        Returns:
            True if any geometry was removed
        """
        reason = self._blocked_reason()
        if reason is not None:
            self.events.log_gesture_ignored(self.character, DrawMode.ERASER.value, reason)
            return False

        result = erase_layers(self.layers, point, radius if radius is not None else self.eraser_radius)
        if not result.changed:
            return False
        self._record()
        self._apply_erase(result.layers, result.removed_ids)
        return True

    def _apply_erase(self, layers: list[Layer], removed_ids: list[str]) -> None:
        self._restore(layers)
        if self.active_layer_id not in self._layers:
            self.active_layer_id = self._order[-1]
        self.events.log_erase(self.character, removed_ids)

    # ------------------------------------------------------------------
    # Layer management

    def select_layer(self, layer_id: str) -> None:
        """Make a layer active and adopt its stroke style as the brush.

        Selecting a layer is not an edit and is not recorded in history.
        """
        layer = self.get_layer(layer_id)
        self.active_layer_id = layer_id
        if isinstance(layer, VectorLayer):
            self.stroke_width = layer.stroke_width
            self.color = layer.color

    def add_layer(self, label: str | None = None) -> VectorLayer:
        """Add an empty vector layer on top and make it active."""
        self._record()
        layer = self._new_vector_layer(label or f"New Layer {len(self._order) + 1}", prefix="layer-man")
        self._put(layer)
        self._order.append(layer.id)
        self.active_layer_id = layer.id
        self.events.log_layer_change(self.character, "add", layer.id)
        return layer

    def import_image(self, image_ref: str, label: str = "Reference Image") -> RasterLayer:
        """Insert a canvas-sized raster layer at the bottom of the stack.

        Args:
            image_ref: Opaque image reference supplied by the importer
            label: Layer label

        Returns:
            The new raster layer, which becomes active
        """
        self._record()
        size = self.settings.canvas.size
        layer = RasterLayer(
            id=new_layer_id("img"),
            image_ref=image_ref,
            width=size,
            height=size,
            opacity=IMAGE_OPACITY,
            label=label,
        )
        self._put(layer)
        self._order.insert(0, layer.id)
        self.active_layer_id = layer.id
        self.events.log_layer_change(self.character, "import", layer.id)
        return layer

    def delete_layer(self, layer_id: str) -> None:
        """Delete a layer.

        Raises:
            LayerNotFoundError: If no layer has this id
            LastLayerError: If it is the only layer left
        """
        self.get_layer(layer_id)
        if len(self._order) == 1:
            raise LastLayerError(layer_id)

        self._record()
        del self._layers[layer_id]
        self._order.remove(layer_id)
        if self.active_layer_id == layer_id:
            self.active_layer_id = None
        self.events.log_layer_change(self.character, "delete", layer_id)

    def move_layer(self, layer_id: str, direction: Literal["up", "down"]) -> bool:
        """Swap a layer with its neighbour above ("up") or below ("down").

        Returns:
            False if the layer is already at that end of the stack
        """
        if direction not in ("up", "down"):
            raise ValueError(f"Invalid move direction: {direction}")
        index = self.index_of(layer_id)
        target = index + 1 if direction == "up" else index - 1
        if target < 0 or target >= len(self._order):
            return False

        self._record()
        self._order[index], self._order[target] = self._order[target], self._order[index]
        self.events.log_layer_change(self.character, f"move-{direction}", layer_id)
        return True

    def rename_layer(self, layer_id: str, label: str) -> None:
        layer = self.get_layer(layer_id)
        self._record()
        self._put(replace(layer, label=label))
        self.events.log_layer_change(self.character, "rename", layer_id)

    def toggle_visibility(self, layer_id: str) -> bool:
        """Flip a layer's visibility.

        Returns:
            The new visibility
        """
        layer = self.get_layer(layer_id)
        self._record()
        self._put(replace(layer, visible=not layer.visible))
        self.events.log_layer_change(self.character, "visibility", layer_id)
        return not layer.visible

    def toggle_lock(self, layer_id: str) -> bool:
        """Flip a layer's lock.

        Returns:
            The new lock state
        """
        layer = self.get_layer(layer_id)
        self._record()
        self._put(replace(layer, locked=not layer.locked))
        self.events.log_layer_change(self.character, "lock", layer_id)
        return not layer.locked

    def toggle_opacity(self, layer_id: str) -> float:
        """Dim a fully opaque layer, or restore a dimmed one to full opacity.

        Returns:
            The new opacity
        """
        layer = self.get_layer(layer_id)
        opacity = DIMMED_OPACITY if layer.opacity in (None, 1, 1.0) else 1.0
        self._record()
        self._put(replace(layer, opacity=opacity))
        self.events.log_layer_change(self.character, "opacity", layer_id)
        return opacity

    def set_stroke_width(self, width: float) -> None:
        """Set the brush width and restyle the active vector layer."""
        self.stroke_width = width
        self._restyle_active(stroke_width=width)

    def set_color(self, color: str) -> None:
        """Set the brush color and restyle the active vector layer."""
        self.color = color
        self._restyle_active(color=color)

    def set_cap(self, cap: LineCap) -> None:
        self.cap = cap
        self._restyle_active(cap=cap)

    def _restyle_active(self, **changes: object) -> None:
        layer = self.active_layer
        if not isinstance(layer, VectorLayer):
            return
        self._record()
        self._put(replace(layer, **changes))  # type: ignore[arg-type]
        self.events.log_layer_change(self.character, "style", layer.id)

    # ------------------------------------------------------------------
    # History

    def undo(self) -> bool:
        """Restore the previous snapshot.

        Returns:
            False if there was nothing to undo
        """
        previous = self.history.undo(self.snapshot())
        if previous is None:
            return False
        self._apply_snapshot(previous)
        self.events.log_undo(self.character, self.history.undo_depth)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone snapshot.

        Returns:
            False if there was nothing to redo
        """
        following = self.history.redo(self.snapshot())
        if following is None:
            return False
        self._apply_snapshot(following)
        self.events.log_redo(self.character, self.history.redo_depth)
        return True

    def _apply_snapshot(self, snapshot: Snapshot) -> None:
        self._gesture = None
        self._restore(snapshot)
        if self.active_layer_id not in self._layers:
            self.active_layer_id = self._order[-1] if self._order else None
        self.dirty = True
