"""
Undo/redo for designs using whole-design JSON snapshots.
"""

import json
import logging
from typing import List, Optional

from core.project import Design

log = logging.getLogger(__name__)


class DesignHistory:
    """
    Snapshot stacks for undo and redo.

    Call push() with the design *before* each mutation. Snapshots are JSON
    strings, so restored designs never share state with live ones.
    """

    MAX_HISTORY = 50

    def __init__(self, max_history: int = MAX_HISTORY):
        self.max_history = max_history
        self._undo: List[str] = []
        self._redo: List[str] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def push(self, design: Design):
        """Record the state before a change. Clears the redo stack."""
        self._push_undo(self._snapshot(design))
        self._redo.clear()

    def undo(self, current: Design) -> Optional[Design]:
        """Restore the previous state; ``current`` becomes redoable."""
        if not self._undo:
            return None
        snapshot = self._undo.pop()
        self._redo.append(self._snapshot(current))
        return self._restore(snapshot)

    def redo(self, current: Design) -> Optional[Design]:
        if not self._redo:
            return None
        snapshot = self._redo.pop()
        self._push_undo(self._snapshot(current))
        return self._restore(snapshot)

    def clear(self):
        self._undo.clear()
        self._redo.clear()

    def _push_undo(self, snapshot: str):
        self._undo.append(snapshot)
        if len(self._undo) > self.max_history:
            del self._undo[0]

    @staticmethod
    def _snapshot(design: Design) -> str:
        return json.dumps(design.to_dict())

    @staticmethod
    def _restore(snapshot: str) -> Design:
        return Design.from_dict(json.loads(snapshot))
