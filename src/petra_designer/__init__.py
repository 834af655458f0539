"""
PetraDesigner core

Graph model, validators and the YAML configuration compiler behind the
PETRA control-logic designer.

Usage:
    from petra_designer import FlowStore, candidate

    store = FlowStore()
    level = store.add_node("signal", (0, 0), payload={"label": "Tank Level"}).data
    add = store.add_node("ADD", (300, 0)).data
    store.connect(candidate(level.id, add.id, target_handle="in1"))
    print(store.generate())
"""
__version__ = "0.1.0"

from petra_designer.application.errors import (
    ConfigGenerationError,
    DesignerError,
    DuplicateError,
    FieldValidationError,
    IncompatibleConnectionError,
    ParseError,
    StructuralError,
)
from petra_designer.application.settings import DesignerSettings
from petra_designer.features.config.application import (
    ParsedFlow,
    build_config,
    generate_config,
    parse_config,
    validate_config_text,
)
from petra_designer.features.connections.application import validate_connection
from petra_designer.features.connections.domain import Edge, candidate
from petra_designer.features.documents.application import check_document, validate_logic
from petra_designer.features.documents.domain import Document
from petra_designer.features.nodes.application import normalize, validate_fields
from petra_designer.features.nodes.domain import Node, NodeKind, Position
from petra_designer.features.store import FlowStore

__all__ = [
    '__version__',
    'ConfigGenerationError',
    'DesignerError',
    'DuplicateError',
    'FieldValidationError',
    'IncompatibleConnectionError',
    'ParseError',
    'StructuralError',
    'DesignerSettings',
    'ParsedFlow',
    'build_config',
    'generate_config',
    'parse_config',
    'validate_config_text',
    'validate_connection',
    'Edge',
    'candidate',
    'check_document',
    'validate_logic',
    'Document',
    'normalize',
    'validate_fields',
    'Node',
    'NodeKind',
    'Position',
    'FlowStore',
]
