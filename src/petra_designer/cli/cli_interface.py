"""
Command line interface for PetraDesigner.

Usage:
    petra-designer generate design.json [-o config.yaml]
    petra-designer parse config.yaml [-o design.json]
    petra-designer check config.yaml|design.json

Exit status is 0 on success and 1 when the input is rejected.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from petra_designer import __version__
from petra_designer.application.errors import DesignerError
from petra_designer.application.settings.designer_settings import DesignerSettings
from petra_designer.features.config.application.config_checker import validate_config_text
from petra_designer.features.config.application.config_generator import generate_config
from petra_designer.features.config.application.config_parser import parse_config
from petra_designer.features.documents.application.document_checks import check_document
from petra_designer.features.documents.domain.document import Document
from petra_designer.features.documents.infrastructure.document_io import document_to_json, load_document
from petra_designer.utils.message import Log


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        Log.info(f"Wrote {path}")
    else:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")


def _load_settings(args) -> DesignerSettings:
    return DesignerSettings.load(args.settings) if args.settings else DesignerSettings()


def _cmd_generate(args) -> int:
    document = load_document(args.document)
    settings = _load_settings(args)
    result = check_document(document, settings.strict_port_types)
    for error in result.errors:
        Log.warning(f"generate: {error}")
    text = generate_config(document.nodes, document.edges, settings)
    _write_output(text, args.output)
    return 0


def _cmd_parse(args) -> int:
    flow = parse_config(Path(args.config).read_text(encoding="utf-8"))
    _write_output(document_to_json(Document(flow.nodes, flow.edges)), args.output)
    return 0


def _cmd_check(args) -> int:
    path = Path(args.file)
    if path.suffix.lower() == ".json":
        result = check_document(load_document(path), _load_settings(args).strict_port_types)
    else:
        result = validate_config_text(path.read_text(encoding="utf-8"))

    if result.valid:
        print(f"{path}: OK")
        return 0
    for error in result.errors:
        print(f"{path}: {error}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petra-designer",
        description="Compile PETRA control-logic designs to runtime configuration and back.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Console log level (default: from settings)")
    parser.add_argument("--settings", default=None,
                        help="Path to a settings.json (default: built-in defaults)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Document JSON -> configuration YAML")
    generate.add_argument("document", help="Design document (.json)")
    generate.add_argument("-o", "--output", help="Output file (default: stdout)")
    generate.set_defaults(func=_cmd_generate)

    parse = subparsers.add_parser("parse", help="Configuration YAML -> document JSON")
    parse.add_argument("config", help="Runtime configuration (.yaml)")
    parse.add_argument("-o", "--output", help="Output file (default: stdout)")
    parse.set_defaults(func=_cmd_parse)

    check = subparsers.add_parser("check", help="Validate a configuration or a document")
    check.add_argument("file", help="Configuration (.yaml) or document (.json)")
    check.set_defaults(func=_cmd_check)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    Log.set_level(args.log_level or _load_settings(args).log_level)
    try:
        return args.func(args)
    except DesignerError as e:
        Log.error(f"{args.command}: {e}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        Log.error(f"{args.command}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
