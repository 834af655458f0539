"""
Snapshot history

Bounded undo/redo over immutable document snapshots. The buffer holds at
most `limit` snapshots; the cursor points at the snapshot matching the
current document. Pushing after an undo discards the redo branch, and
pushing past the limit drops the oldest snapshot.
"""
from typing import List, Optional

from petra_designer.features.documents.domain.document import EMPTY_DOCUMENT, Document


class SnapshotHistory:
    def __init__(self, limit: int = 50, initial: Document = EMPTY_DOCUMENT):
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.limit = limit
        self._snapshots: List[Document] = []
        self._cursor = -1
        self.reset(initial)

    def reset(self, document: Document = EMPTY_DOCUMENT) -> None:
        """Forget everything and start from document."""
        self._snapshots = [document]
        self._cursor = 0

    def push(self, document: Document) -> None:
        """Record a committed document."""
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(document)
        overflow = len(self._snapshots) - self.limit
        if overflow > 0:
            del self._snapshots[:overflow]
        self._cursor = len(self._snapshots) - 1

    @property
    def current(self) -> Document:
        return self._snapshots[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def undo(self) -> Optional[Document]:
        """Step back; returns the snapshot to restore, or None at the start."""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self.current

    def redo(self) -> Optional[Document]:
        if not self.can_redo():
            return None
        self._cursor += 1
        return self.current

    def __len__(self) -> int:
        return len(self._snapshots)
