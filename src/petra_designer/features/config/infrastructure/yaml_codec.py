"""
YAML codec for the runtime configuration text.

Dumps with 2-space indentation (list items indented under their key),
insertion key order and no line wrapping so generated files diff cleanly.
"""
from typing import Any

import yaml

from petra_designer.application.errors import ParseError


class ConfigDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences under their parent key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def dump_config(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=ConfigDumper,
        indent=2,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


def load_config(text: str) -> Any:
    """
    Parse YAML text with the safe loader.

    Raises:
        ParseError: With line/column (1-based) when the YAML is malformed
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None) or str(e)
        if mark is not None:
            raise ParseError(f"Malformed YAML: {problem}", mark.line + 1, mark.column + 1) from e
        raise ParseError(f"Malformed YAML: {problem}") from e
