"""Format constants and shared sentinels for ParamPackage encoding."""

from __future__ import annotations

from enum import Enum, auto


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

KEY_VALUE_SEPARATOR = ":"
PARAM_SEPARATOR = ","
LIST_SEPARATOR = "|"

LIST_OPEN = "["
LIST_CLOSE = "]"

ESCAPE_CHARACTER = "$"
KEY_VALUE_SEPARATOR_ESCAPE = "$0"
PARAM_SEPARATOR_ESCAPE = "$1"
ESCAPE_CHARACTER_ESCAPE = "$2"

# Stands in for an empty package; some frontends read "" as "not set".
EMPTY_PLACEHOLDER = "[empty]"

PLACEHOLDER_PREFIX = "##"


# ---------------------------------------------------------------------------
# Empty — singleton for failed decodes
# ---------------------------------------------------------------------------

class _EmptyType:
    """Sentinel returned when a stored string cannot be decoded."""

    _instance: _EmptyType | None = None

    def __new__(cls) -> _EmptyType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False


Empty = _EmptyType()


# ---------------------------------------------------------------------------
# ValueKind
# ---------------------------------------------------------------------------

class ValueKind(Enum):
    """Outer shape of a stored value, judged one level deep."""

    Scalar = auto()
    List = auto()        # [a|b|c]
    Package = auto()     # [k:v,k:v]
    PackageList = auto() # [k:v,k:v|k:v,k:v]
    Unit = auto()        # [a]: one item, or a one-key package
