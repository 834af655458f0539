"""
Port type value object

Data type carried by a signal or a block port. The config format does not
carry port types, so ports rebuilt from config text are typed ANY.
"""
from dataclasses import dataclass


NUMERIC_TYPE_NAMES = frozenset({"int", "float"})


@dataclass(frozen=True)
class PortType:
    """
    Immutable port type identifier ("bool", "int", "float", "any").
    """
    name: str

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Port type name cannot be empty")

    @property
    def is_any(self) -> bool:
        return self.name == "any"

    @property
    def is_numeric(self) -> bool:
        return self.name in NUMERIC_TYPE_NAMES

    def is_compatible_with(self, other: 'PortType') -> bool:
        """
        Domain rule used by strict connection checking.

        ANY matches everything, int and float are interchangeable,
        bool only matches bool. Unknown type names match by equality.
        """
        if self.is_any or other.is_any:
            return True
        if self.is_numeric and other.is_numeric:
            return True
        return self.name == other.name

    def __str__(self) -> str:
        return self.name


BOOL_TYPE = PortType("bool")
INT_TYPE = PortType("int")
FLOAT_TYPE = PortType("float")
ANY_TYPE = PortType("any")


def get_port_type(name: str) -> PortType:
    """Factory returning the shared instance for known names."""
    known_types = {
        "bool": BOOL_TYPE,
        "int": INT_TYPE,
        "float": FLOAT_TYPE,
        "any": ANY_TYPE,
    }
    return known_types.get(name, PortType(name))
