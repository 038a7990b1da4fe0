"""Exceptions raised by parampack.

Malformed or mistyped data never raises; it is logged and the caller's
default is returned.  These cover misuse of the API itself.
"""

from __future__ import annotations


class ParamPackageError(Exception):
    """Base class for parampack errors."""


class UnsupportedValueError(ParamPackageError, TypeError):
    """A value or default has no stored-string encoding."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"unsupported value type: {type(value).__name__}")
