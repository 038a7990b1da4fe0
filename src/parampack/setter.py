"""Encoding of typed values into their stored string form."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .model import LIST_CLOSE, LIST_OPEN, LIST_SEPARATOR

if TYPE_CHECKING:
    from .package import ParamPackage


def encode_int(value: int) -> str:
    return str(int(value))


def encode_float(value: float) -> str:
    """Shortest text that reads back as the same float."""
    return repr(float(value))


def _bracket(items: Iterable[str]) -> str:
    return LIST_OPEN + LIST_SEPARATOR.join(items) + LIST_CLOSE


def encode_str_list(values: Iterable[str]) -> str:
    """Store items as-is; escaping happens when the package is serialized."""
    return _bracket(values)


def encode_int_list(values: Iterable[int]) -> str:
    return _bracket(encode_int(v) for v in values)


def encode_float_list(values: Iterable[float]) -> str:
    return _bracket(encode_float(v) for v in values)


def encode_package(value: ParamPackage) -> str:
    return LIST_OPEN + value.serialize() + LIST_CLOSE


def encode_package_list(values: Iterable[ParamPackage]) -> str:
    return _bracket(v.serialize() for v in values)
