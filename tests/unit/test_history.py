"""
Tests for the bounded snapshot history.
"""
import pytest

from petra_designer.features.documents.domain.document import EMPTY_DOCUMENT, Document
from petra_designer.features.store.application.history import SnapshotHistory


def _doc(make_signal, count):
    return Document([make_signal(f"s{i}") for i in range(count)])


class TestSnapshotHistory:

    def test_starts_at_initial(self):
        history = SnapshotHistory()
        assert history.current is EMPTY_DOCUMENT
        assert not history.can_undo()
        assert not history.can_redo()
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_redo(self, make_signal):
        history = SnapshotHistory()
        one, two = _doc(make_signal, 1), _doc(make_signal, 2)
        history.push(one)
        history.push(two)

        assert history.undo() is one
        assert history.undo() is EMPTY_DOCUMENT
        assert history.redo() is one
        assert history.redo() is two
        assert not history.can_redo()

    def test_push_discards_redo_branch(self, make_signal):
        history = SnapshotHistory()
        history.push(_doc(make_signal, 1))
        history.push(_doc(make_signal, 2))
        history.undo()
        branch = _doc(make_signal, 3)
        history.push(branch)
        assert not history.can_redo()
        assert history.current is branch
        assert len(history) == 3

    def test_limit_drops_oldest(self, make_signal):
        history = SnapshotHistory(limit=3)
        docs = [_doc(make_signal, i) for i in range(1, 6)]
        for doc in docs:
            history.push(doc)
        assert len(history) == 3
        assert history.undo() is docs[3]
        assert history.undo() is docs[2]
        assert history.undo() is None

    def test_reset(self, make_signal):
        history = SnapshotHistory()
        history.push(_doc(make_signal, 1))
        history.reset()
        assert len(history) == 1
        assert history.cursor == 0

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            SnapshotHistory(limit=0)
