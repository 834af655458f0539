"""
Document persistence

Documents are stored as JSON ({"version", "nodes", "edges"}).
"""
from pathlib import Path
from typing import Union
import json

from petra_designer.application.errors import ParseError
from petra_designer.features.documents.domain.document import DOCUMENT_FORMAT_VERSION, Document
from petra_designer.utils.message import Log


def document_to_json(document: Document) -> str:
    return json.dumps(document.to_dict(), indent=2)


def document_from_json(text: str) -> Document:
    """
    Raises:
        ParseError: If the text is not a JSON document of the expected shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON: {e.msg}", e.lineno, e.colno) from e

    if not isinstance(data, dict):
        raise ParseError("Document must be a JSON object")
    version = data.get("version", DOCUMENT_FORMAT_VERSION)
    if version != DOCUMENT_FORMAT_VERSION:
        raise ParseError(f"Unsupported document version: {version}")

    try:
        return Document.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Invalid document: {e}") from e


def save_document(document: Document, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document_to_json(document), encoding="utf-8")
    Log.info(f"DocumentIO: Saved {len(document.nodes)} node(s) to {path}")
    return path


def load_document(path: Union[str, Path]) -> Document:
    """
    Read a document file.

    Raises:
        OSError: If the file cannot be read
        ParseError: If its content is not a valid document
    """
    path = Path(path)
    document = document_from_json(path.read_text(encoding="utf-8"))
    Log.info(f"DocumentIO: Loaded {len(document.nodes)} node(s) from {path}")
    return document
