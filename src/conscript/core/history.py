"""Undo/redo over layer-stack snapshots.

Linear two-stack history. A snapshot is the full ordered layer stack;
layers are immutable values, so a tuple of them is a deep copy.
"""

from collections import deque

from conscript.domain import Layer

Snapshot = tuple[Layer, ...]


class LayerHistory:
    """Two-stack undo/redo history scoped to one edit session.

    Example:
        history = LayerHistory()
        history.push(current)          # before mutating
        restored = history.undo(current_after_mutation)
    """

    def __init__(self, max_depth: int | None = None) -> None:
        """Initialize an empty history.

        Args:
            max_depth: Maximum snapshots kept on each stack (None = unbounded)
        """
        self.max_depth = max_depth
        self._undo: deque[Snapshot] = deque(maxlen=max_depth)
        self._redo: deque[Snapshot] = deque(maxlen=max_depth)

    def push(self, snapshot: Snapshot) -> None:
        """Record the state before a mutation and invalidate redo.

        Args:
            snapshot: Layer stack prior to the mutation
        """
        self._undo.append(tuple(snapshot))
        self._redo.clear()

    def undo(self, current: Snapshot) -> Snapshot | None:
        """Step back one snapshot.

        Args:
            current: The present layer stack, saved for redo

        Returns:
            Snapshot to restore, or None if there is nothing to undo
        """
        if not self._undo:
            return None
        previous = self._undo.pop()
        self._redo.append(tuple(current))
        return previous

    def redo(self, current: Snapshot) -> Snapshot | None:
        """Step forward one snapshot.

        Args:
            current: The present layer stack, saved for undo

        Returns:
            Snapshot to restore, or None if there is nothing to redo
        """
        if not self._redo:
            return None
        following = self._redo.pop()
        self._undo.append(tuple(current))
        return following

    def clear(self) -> None:
        """Drop both stacks."""
        self._undo.clear()
        self._redo.clear()

    def discard_last(self) -> Snapshot | None:
        """Remove the most recent undo snapshot without restoring redo.

        Returns:
            The removed snapshot, or None if the undo stack is empty
        """
        if not self._undo:
            return None
        return self._undo.pop()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)
