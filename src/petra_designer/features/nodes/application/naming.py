"""
Canonical names

Turns user-facing labels into the identifiers the config format uses.
"""
import re
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple

if TYPE_CHECKING:
    from petra_designer.features.nodes.domain.node import Node

_INVALID_CHARS = re.compile(r"[^a-z0-9_]")


def normalize(label: Any, fallback: str) -> str:
    """
    Lower-case label and replace every character outside [a-z0-9_] with '_'.

    Returns fallback when the result is empty. Total over any input (None and
    non-strings are treated as empty/str()) and idempotent:
    normalize(normalize(x, f), f) == normalize(x, f) for a canonical fallback.
    """
    if label is None:
        return fallback
    text = label if isinstance(label, str) else str(label)
    name = _INVALID_CHARS.sub("_", text.lower())
    return name or fallback


def assign_signal_names(signals: Iterable["Node"]) -> Tuple[Dict[str, str], List[str]]:
    """
    Canonical names for signal nodes, in document order.

    Unlabelled signals fall back to "signal_<index>" where index counts
    signal nodes only.

    Returns:
        (node id -> canonical name, names claimed by more than one signal)
    """
    names: Dict[str, str] = {}
    owners: Dict[str, int] = {}
    for index, node in enumerate(signals):
        name = normalize(node.label, f"signal_{index}")
        names[node.id] = name
        owners[name.casefold()] = owners.get(name.casefold(), 0) + 1
    duplicates = sorted({n for n in names.values() if owners[n.casefold()] > 1})
    return names, duplicates
