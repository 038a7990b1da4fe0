"""parampack — string-based key-value container with a flat text encoding."""

from .codec import (
    classify,
    escape,
    placeholderify,
    replace_placeholders,
    unescape,
)
from .errors import ParamPackageError, UnsupportedValueError
from .model import EMPTY_PLACEHOLDER, Empty, ValueKind
from .package import ParamPackage
from .repl import PackageRepl

__all__ = [
    "ParamPackage",
    "PackageRepl",
    "ParamPackageError",
    "UnsupportedValueError",
    "EMPTY_PLACEHOLDER",
    "Empty",
    "ValueKind",
    "classify",
    "escape",
    "unescape",
    "placeholderify",
    "replace_placeholders",
]
