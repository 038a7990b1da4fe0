"""Decoding of stored strings into typed values.

Each ``decode_*`` function returns the decoded value, or ``Empty`` after
logging why the stored text could not be read as the requested type.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable, TypeVar

from .codec import (
    is_bracketed,
    placeholderify,
    replace_placeholders,
    split_fields,
    strip_brackets,
)
from .model import EMPTY_PLACEHOLDER, LIST_SEPARATOR, PARAM_SEPARATOR, Empty, _EmptyType

if TYPE_CHECKING:
    from .package import ParamPackage

logger = logging.getLogger(__name__)

T = TypeVar("T")

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INT_PREFIX_RE = re.compile(r"\s*([+-]?[0-9]+)")
_FLOAT_PREFIX_RE = re.compile(
    r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def decode_int(raw: str) -> int | _EmptyType:
    """Read the leading integer of *raw*; trailing text is ignored.

    Values outside the 32-bit signed range are failures.
    """
    m = _INT_PREFIX_RE.match(raw)
    if m is None:
        logger.error("failed to convert %s to int", raw)
        return Empty
    value = int(m.group(1))
    if not INT_MIN <= value <= INT_MAX:
        logger.error("failed to convert %s to int: out of range", raw)
        return Empty
    return value


def decode_float(raw: str) -> float | _EmptyType:
    """Read the leading float of *raw*; trailing text is ignored."""
    m = _FLOAT_PREFIX_RE.match(raw)
    if m is None:
        logger.error("failed to convert %s to float", raw)
        return Empty
    return float(m.group(1))


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def decode_str_list(raw: str) -> list[str] | _EmptyType:
    if not is_bracketed(raw):
        logger.error("failed to convert %s to list", raw)
        return Empty
    return split_fields(strip_brackets(raw), LIST_SEPARATOR)


def _decode_number_list(
    raw: str, convert: Callable[[str], T | _EmptyType]
) -> list[T] | _EmptyType:
    items = decode_str_list(raw)
    if not items:
        # Covers both a failed decode and an empty list.
        return Empty
    out: list[T] = []
    for item in items:
        value = convert(item)
        if value is Empty:
            return Empty
        out.append(value)
    return out


def decode_int_list(raw: str) -> list[int] | _EmptyType:
    return _decode_number_list(raw, decode_int)


def decode_float_list(raw: str) -> list[float] | _EmptyType:
    return _decode_number_list(raw, decode_float)


# ---------------------------------------------------------------------------
# Nested packages
# ---------------------------------------------------------------------------

def decode_package(raw: str) -> ParamPackage | _EmptyType:
    """Decode ``[k:v,k:v]`` into a ParamPackage.

    Only the outer layer is inspected, so nested regions are masked with
    placeholders before looking for separators.  A payload with no
    top-level ``,`` is rejected: it cannot be told apart from a one-item
    list.
    """
    from .package import ParamPackage

    if not is_bracketed(raw):
        logger.error("%s is not a ParamPackage", raw)
        return Empty

    inner = strip_brackets(raw)
    if inner == EMPTY_PLACEHOLDER:
        return ParamPackage()

    outer = placeholderify(inner, [])
    if LIST_SEPARATOR in outer:
        logger.error("%s is a list, not a ParamPackage", raw)
        return Empty
    if PARAM_SEPARATOR not in outer:
        logger.error("%s is a unit list of a primitive type, not a ParamPackage", raw)
        return Empty
    return ParamPackage(inner)


def decode_package_list(raw: str) -> list[ParamPackage] | _EmptyType:
    """Decode ``[k:v,k:v|k:v,k:v]`` into a list of ParamPackages."""
    from .package import ParamPackage

    if not is_bracketed(raw):
        logger.error("%s is not a list", raw)
        return Empty

    lookup: list[str] = []
    outer = placeholderify(strip_brackets(raw), lookup)
    if PARAM_SEPARATOR not in outer:
        logger.error("%s is a list of a primitive type, not of ParamPackages", raw)
        return Empty

    return [
        ParamPackage(replace_placeholders(item, lookup))
        for item in split_fields(outer, LIST_SEPARATOR)
    ]
