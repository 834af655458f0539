"""
Shared fixtures: node factories and a fresh store.
"""
import pytest

from petra_designer.application.settings.designer_settings import DesignerSettings
from petra_designer.features.nodes.domain.node import Node, Position
from petra_designer.features.nodes.domain.payloads import (
    BlockPayload,
    MqttPayload,
    S7Payload,
    SignalPayload,
    TwilioPayload,
)
from petra_designer.features.store.application.flow_store import FlowStore


@pytest.fixture
def make_signal():
    def _make(node_id, label=None, signal_type="float", initial=None, mode="write"):
        if initial is None:
            initial = False if signal_type == "bool" else 0
        return Node(node_id, Position(0, 0), SignalPayload(
            label=node_id if label is None else label,
            signal_type=signal_type,
            initial=initial,
            mode=mode,
        ))
    return _make


@pytest.fixture
def make_block():
    def _make(node_id, block_type="ADD", inputs=("a", "b"), outputs=("out",),
              label=None, params=None, port_type="float"):
        return Node(node_id, Position(300, 0), BlockPayload(
            label=node_id if label is None else label,
            block_type=block_type,
            inputs=[{"name": n, "type": port_type} for n in inputs],
            outputs=[{"name": n, "type": port_type} for n in outputs],
            params=params or {},
        ))
    return _make


@pytest.fixture
def make_twilio():
    def _make(node_id, configured=True, **fields):
        fields.setdefault("label", node_id)
        return Node(node_id, Position(600, 0), TwilioPayload(configured=configured, **fields))
    return _make


@pytest.fixture
def make_mqtt():
    def _make(node_id, configured=True, **fields):
        fields.setdefault("label", node_id)
        return Node(node_id, Position(600, 0), MqttPayload(configured=configured, **fields))
    return _make


@pytest.fixture
def make_s7():
    def _make(node_id, configured=True, **fields):
        fields.setdefault("label", node_id)
        return Node(node_id, Position(600, 0), S7Payload(configured=configured, **fields))
    return _make


@pytest.fixture
def settings():
    return DesignerSettings()


@pytest.fixture
def store(settings):
    return FlowStore(settings=settings)
