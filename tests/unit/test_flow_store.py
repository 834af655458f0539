"""
Tests for the FlowStore facade: atomic mutations, history, selection and events.
"""
import pytest

from petra_designer.application.errors import ConfigGenerationError
from petra_designer.application.events.event_bus import ALL_EVENTS
from petra_designer.application.events.events import NodeRemoved, NodeUpdated
from petra_designer.application.settings.designer_settings import DesignerSettings
from petra_designer.features.connections.application.connection_validator import (
    CONNECTION_EXISTS,
    TWILIO_BOOL_ONLY,
)
from petra_designer.features.connections.domain.connection import Edge, candidate
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.store.application.flow_store import FlowStore


@pytest.fixture
def wired(store):
    """level (float) -> GT.in1, GT.out -> alarm (bool)"""
    store.add_node("signal", (0, 0), node_id="level", payload={"label": "Tank Level"})
    store.add_node("signal", (0, 80), node_id="alarm",
                   payload={"label": "High Alarm", "signal_type": "bool", "initial": False})
    store.add_node("GT", (300, 0), node_id="cmp", payload={"label": "Level Check"})
    store.connect(Edge("e1", "level", "cmp", None, "in1"))
    store.connect(Edge("e2", "cmp", "alarm", "out", None))
    return store


@pytest.fixture
def events(store):
    received = []
    store.subscribe(ALL_EVENTS, received.append)
    return received


class TestAddNode:

    def test_default_payload(self, store):
        result = store.add_node("signal")
        assert result.success
        node = result.data
        assert node.kind is NodeKind.SIGNAL
        assert node.payload.label == "New Signal"
        assert store.nodes == (node,)

    def test_block_type_preset(self, store):
        node = store.add_node("ON_DELAY", (10, 20)).data
        assert node.kind is NodeKind.BLOCK
        assert node.payload.input_names() == ("in",)
        assert node.payload.params == {"preset_ms": 1000}
        assert (node.position.x, node.position.y) == (10, 20)

    def test_unknown_kind(self, store):
        result = store.add_node("flux_capacitor")
        assert result.failed
        assert "flux_capacitor" in result.message
        assert store.nodes == ()

    def test_unknown_payload_field(self, store):
        result = store.add_node("mqtt", payload={"brokr_host": "x"})
        assert result.failed
        assert "brokr_host" in result.message
        assert store.nodes == ()

    def test_duplicate_id(self, store):
        store.add_node("signal", node_id="s1")
        result = store.add_node("mqtt", node_id="s1")
        assert result.failed
        assert len(store.nodes) == 1


class TestConnect:

    def test_duplicate_connection_rejected_atomically(self, wired):
        document = wired.document
        result = wired.connect(candidate("level", "cmp", target_handle="in1"))
        assert result.failed
        assert result.message == CONNECTION_EXISTS
        assert wired.document is document

    def test_twilio_rejects_float_signal(self, store):
        store.add_node("signal", node_id="level")
        store.add_node("twilio", node_id="sms")
        result = store.connect(candidate("level", "sms"))
        assert result.message == TWILIO_BOOL_ONLY
        assert store.edges == ()

    def test_missing_endpoint(self, store):
        store.add_node("signal", node_id="s")
        assert store.connect(candidate("s", "ghost")).failed

    def test_strict_port_types_from_settings(self):
        store = FlowStore(settings=DesignerSettings(strict_port_types=True))
        store.add_node("signal", node_id="flag", payload={"signal_type": "bool", "initial": False})
        store.add_node("GT", node_id="cmp")
        result = store.connect(candidate("flag", "cmp", target_handle="in1"))
        assert result.failed
        assert "Port type mismatch" in result.message

    def test_update_cannot_break_twilio_trigger(self, store):
        store.add_node("signal", node_id="s", payload={"signal_type": "bool", "initial": False})
        store.add_node("twilio", node_id="t")
        assert store.connect(candidate("s", "t")).success
        result = store.update_payload("s", {"signal_type": "float", "initial": 0.0})
        assert result.failed
        assert TWILIO_BOOL_ONLY in result.message
        assert store.get_node("s").payload.signal_type == "bool"
        assert len(store.edges) == 1

    def test_validate_connection_does_not_mutate(self, wired):
        assert not wired.validate_connection(candidate("level", "cmp", target_handle="in1")).valid
        assert wired.validate_connection(candidate("level", "cmp", target_handle="in2")).valid
        assert len(wired.edges) == 2


class TestDeleteNode:

    def test_cascade(self, wired, events):
        result = wired.delete_node("cmp")
        assert result.success
        assert [n.id for n in wired.nodes] == ["level", "alarm"]
        assert wired.edges == ()
        removed = [e for e in events if isinstance(e, NodeRemoved)]
        assert removed[0].data == {"node_id": "cmp", "edge_ids": ["e1", "e2"]}

    def test_unknown_node(self, wired):
        document = wired.document
        assert wired.delete_node("ghost").failed
        assert wired.document is document

    def test_delete_edge(self, wired):
        assert wired.delete_edge("e1").success
        assert [e.id for e in wired.edges] == ["e2"]
        assert wired.delete_edge("e1").failed


class TestUpdatePayload:

    def test_invalid_field_rejected(self, store):
        node = store.add_node("s7").data
        result = store.update_payload(node.id, {"rack": 9})
        assert result.failed
        assert result.message == "rack must be between 0 and 7"
        assert store.get_node(node.id).payload.rack == 0

    def test_validation_can_be_deferred(self, store):
        node = store.add_node("s7").data
        assert store.update_payload(node.id, {"rack": 9}, validate=False).success
        assert not store.validate_field(node.id).valid

    def test_unknown_field(self, store):
        node = store.add_node("signal").data
        result = store.update_payload(node.id, {"colour": "red"})
        assert result.failed
        assert "colour" in result.message

    def test_wrong_type_rejected(self, store):
        node = store.add_node("mqtt").data
        prefix = node.payload.topic_prefix
        result = store.update_payload(node.id, {"topic_prefix": 5})
        assert result.failed
        assert "topic_prefix" in result.message
        assert store.get_node(node.id).payload.topic_prefix == prefix

    def test_block_type_change_resets_ports_and_prunes_edges(self, wired, events):
        result = wired.update_payload("cmp", {"block_type": "NOT"})
        assert result.success
        block = wired.get_node("cmp")
        assert block.payload.input_names() == ("in",)
        assert block.payload.output_names() == ("out",)
        # "out" survives, "in1" is gone
        assert [e.id for e in wired.edges] == ["e2"]
        updated = [e for e in events if isinstance(e, NodeUpdated)]
        assert updated[-1].data["dropped_edge_ids"] == ["e1"]

    def test_move_node(self, wired):
        wired.move_node("level", {"x": 5, "y": 7})
        position = wired.get_node("level").position
        assert (position.x, position.y) == (5, 7)


class TestHistory:

    def test_undo_redo(self, store):
        store.add_node("signal", node_id="a")
        store.add_node("signal", node_id="b")

        assert store.undo().success
        assert [n.id for n in store.nodes] == ["a"]
        assert store.redo().success
        assert [n.id for n in store.nodes] == ["a", "b"]

    def test_nothing_to_undo(self, store):
        assert not store.can_undo
        assert store.undo().message == "Nothing to undo"
        assert store.redo().message == "Nothing to redo"

    def test_new_mutation_clears_redo(self, store):
        store.add_node("signal", node_id="a")
        store.undo()
        store.add_node("signal", node_id="b")
        assert not store.can_redo

    def test_rejected_mutation_not_recorded(self, store):
        store.add_node("signal", node_id="a")
        store.add_node("signal", node_id="a")
        store.undo()
        assert store.nodes == ()
        assert not store.can_undo

    def test_limit(self):
        store = FlowStore(settings=DesignerSettings(history_limit=3))
        for i in range(5):
            store.add_node("signal", node_id=f"s{i}")
        assert store.undo().success
        assert store.undo().success
        assert store.undo().failed
        assert [n.id for n in store.nodes] == ["s0", "s1", "s2"]

    def test_undo_clears_vanished_selection(self, store):
        store.add_node("signal", node_id="a")
        store.select("a")
        store.undo()
        assert store.selected_node_id is None


class TestSelection:

    def test_select_and_clear(self, wired):
        assert wired.select("cmp").data.id == "cmp"
        assert wired.selected_node.id == "cmp"
        wired.select(None)
        assert wired.selected_node is None

    def test_select_unknown(self, wired):
        assert wired.select("ghost").failed
        assert wired.selected_node_id is None

    def test_select_not_recorded(self, store):
        store.add_node("signal", node_id="a")
        store.select("a")
        store.undo()
        assert store.nodes == ()
        assert not store.can_undo

    def test_deleting_selected_node_clears_selection(self, wired):
        wired.select("cmp")
        wired.delete_node("cmp")
        assert wired.selected_node_id is None


class TestEvents:

    def test_event_sequence(self, store, events):
        store.add_node("signal", node_id="a")
        store.select("a")
        store.delete_node("a")
        store.undo()
        store.clear()
        assert [e.name for e in events] == [
            "NodeAdded", "SelectionChanged", "NodeRemoved", "SelectionChanged",
            "HistoryMoved", "DocumentReplaced",
        ]

    def test_rejections_publish_nothing(self, store, events):
        store.delete_node("ghost")
        store.connect(candidate("a", "b"))
        assert events == []

    def test_failing_handler_does_not_break_store(self, store):
        def boom(event):
            raise RuntimeError("handler failed")

        store.subscribe("NodeAdded", boom)
        assert store.add_node("signal").success
        assert len(store.nodes) == 1


class TestLoadAndClear:

    def test_load_rejects_dangling_edge(self, wired, make_signal):
        document = wired.document
        result = wired.load([make_signal("x")], [Edge("e", "x", "missing")])
        assert result.failed
        assert wired.document is document

    def test_load_replaces_document(self, wired, make_signal):
        assert wired.load([make_signal("x")], []).success
        assert [n.id for n in wired.nodes] == ["x"]
        assert wired.undo().success
        assert len(wired.nodes) == 3

    def test_clear(self, wired):
        wired.clear()
        assert wired.nodes == () and wired.edges == ()
        assert wired.can_undo


class TestConfigText:

    def test_generate(self, wired):
        text = wired.generate()
        assert "name: tank_level" in text
        assert "in1: tank_level" in text
        assert "out: high_alarm" in text

    def test_generate_duplicate_names(self, store):
        store.add_node("signal", payload={"label": "Tank"})
        store.add_node("signal", payload={"label": "tank"})
        with pytest.raises(ConfigGenerationError):
            store.generate()

    def test_import_config(self, wired):
        result = wired.import_config(wired.generate())
        assert result.success
        assert result.message == "Imported 3 node(s), 2 edge(s), 0 warning(s)"
        assert [n.id for n in wired.nodes] == ["signal_0", "signal_1", "block_0"]

    def test_import_failure_leaves_store_unchanged(self, wired):
        document = wired.document
        result = wired.import_config("signals:\n  - name: [broken\n")
        assert result.failed
        assert wired.document is document

    def test_import_rejects_list_trigger(self, wired):
        document = wired.document
        result = wired.import_config(
            "signals: []\nblocks: []\ntwilio:\n  actions:\n    - name: a\n      trigger_signal: [x]\n"
        )
        assert result.failed
        assert "trigger_signal" in result.message
        assert wired.document is document

    def test_parse_does_not_touch_store(self, wired):
        flow = wired.parse("signals:\n  - name: x\n")
        assert len(flow.nodes) == 1
        assert len(wired.nodes) == 3

    def test_import_file(self, store, tmp_path):
        path = tmp_path / "petra.yaml"
        path.write_text("signals:\n  - name: x\n    type: bool\nblocks: []\n", encoding="utf-8")
        assert store.import_file(path).success
        assert store.nodes[0].payload.signal_type == "bool"
        assert store.import_file(tmp_path / "missing.yaml").failed


class TestLogicSummary:

    def test_empty(self, store):
        summary = store.validate_logic()
        assert not summary.valid
        assert summary.errors == ["No blocks in design"]

    def test_wired(self, wired):
        summary = wired.validate_logic()
        assert summary.valid
        assert (summary.node_count, summary.connection_count) == (3, 2)
        assert wired.check().valid
