"""ParamPackage — a string-based key-value container with a flat text form."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, TypeVar

from . import getter, setter
from .codec import (
    escape,
    is_single_region,
    placeholderify,
    replace_placeholders,
    split_fields,
    unescape,
)
from .errors import UnsupportedValueError
from .model import EMPTY_PLACEHOLDER, KEY_VALUE_SEPARATOR, PARAM_SEPARATOR, Empty

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ParamPackage:
    """Ordered-by-key mapping of string keys to encoded string values.

    Usage::

        pkg = ParamPackage("engine:sdl,port:0")
        pkg.get_int("port", -1)            # → 0
        pkg.set_float_list("deadzone", [0.1, 0.2])
        pkg.serialize()                    # → "deadzone:[0.1|0.2],engine:sdl,port:0"

    Reads never raise: a missing key or undecodable value is logged and
    the supplied default is returned.

    Placeholder tokens are not escaped on the wire.  A scalar holding
    literal ``##N`` text beside a bracketed part (``"##0[x]"``) decodes
    with the token expanded (``"[x][x]"``).
    """

    def __init__(self, serialized: str | None = None) -> None:
        self._data: dict[str, str] = {}
        if serialized is None or serialized == EMPTY_PLACEHOLDER:
            return

        lookup: list[str] = []
        text = placeholderify(serialized, lookup)

        for pair in split_fields(text, PARAM_SEPARATOR):
            key_value = split_fields(pair, KEY_VALUE_SEPARATOR)
            if len(key_value) != 2:
                logger.warning("invalid key pair %s", pair)
                continue
            key, value = (unescape(part) for part in key_value)
            self._data[key] = value

        for key, value in self._data.items():
            self._data[key] = replace_placeholders(value, lookup)

    # -- Construction ---------------------------------------------------

    @classmethod
    def parse(cls, serialized: str) -> ParamPackage:
        return cls(serialized)

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str] | Iterable[tuple[str, str]]) -> ParamPackage:
        """Build a package from already-decoded pairs, stored verbatim."""
        pkg = cls()
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in items:
            pkg._data[key] = value
        return pkg

    def copy(self) -> ParamPackage:
        return ParamPackage.from_pairs(self._data)

    # -- Serialization --------------------------------------------------

    def serialize(self) -> str:
        """Return the flat text form; ``[empty]`` for an empty package.

        Keys and scalar values are escaped.  A value that is one balanced
        bracket region holds text built by a nested serialize or list
        encoder and is written as-is.
        """
        if not self._data:
            return EMPTY_PLACEHOLDER

        pairs = []
        for key, value in self.items():
            if not is_single_region(value):
                value = escape(value)
            pairs.append(escape(key) + KEY_VALUE_SEPARATOR + value)
        return PARAM_SEPARATOR.join(pairs)

    # -- Typed getters --------------------------------------------------

    def _get(self, key: str, default: T, decode: Callable[[str], Any]) -> T:
        raw = self._data.get(key)
        if raw is None:
            logger.debug("key %s not found", key)
            return default
        value = decode(raw)
        if value is Empty:
            return default
        return value

    def get_str(self, key: str, default: str = "") -> str:
        return self._get(key, default, lambda raw: raw)

    def get_int(self, key: str, default: int = 0) -> int:
        return self._get(key, default, getter.decode_int)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._get(key, default, getter.decode_float)

    def get_str_list(self, key: str, default: list[str] | None = None) -> list[str]:
        return self._get(key, _or_empty_list(default), getter.decode_str_list)

    def get_int_list(self, key: str, default: list[int] | None = None) -> list[int]:
        return self._get(key, _or_empty_list(default), getter.decode_int_list)

    def get_float_list(self, key: str, default: list[float] | None = None) -> list[float]:
        return self._get(key, _or_empty_list(default), getter.decode_float_list)

    def get_package(self, key: str, default: ParamPackage | None = None) -> ParamPackage:
        if default is None:
            default = ParamPackage()
        return self._get(key, default, getter.decode_package)

    def get_package_list(
        self, key: str, default: list[ParamPackage] | None = None
    ) -> list[ParamPackage]:
        return self._get(key, _or_empty_list(default), getter.decode_package_list)

    def get(self, key: str, default: Any) -> Any:
        """Read *key* as the type of *default*.

        A list default picks its element type from its first item; an
        empty list reads a list of strings.

        Raises UnsupportedValueError when *default* has no stored-string
        encoding (``None``, a dict, ...).  Stored data never raises.
        """
        return _GETTERS[_type_tag(default)](self, key, default)

    # -- Typed setters --------------------------------------------------

    def set_str(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_int(self, key: str, value: int) -> None:
        self._data[key] = setter.encode_int(value)

    def set_float(self, key: str, value: float) -> None:
        self._data[key] = setter.encode_float(value)

    def set_str_list(self, key: str, value: Iterable[str]) -> None:
        self._data[key] = setter.encode_str_list(value)

    def set_int_list(self, key: str, value: Iterable[int]) -> None:
        self._data[key] = setter.encode_int_list(value)

    def set_float_list(self, key: str, value: Iterable[float]) -> None:
        self._data[key] = setter.encode_float_list(value)

    def set_package(self, key: str, value: ParamPackage) -> None:
        self._data[key] = setter.encode_package(value)

    def set_package_list(self, key: str, value: Iterable[ParamPackage]) -> None:
        self._data[key] = setter.encode_package_list(value)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, encoded according to its type."""
        _SETTERS[_type_tag(value)](self, key, value)

    # -- Other methods --------------------------------------------------

    def has(self, key: str) -> bool:
        return key in self._data

    def erase(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return sorted(self._data)

    def items(self) -> list[tuple[str, str]]:
        return sorted(self._data.items())

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """Iterate ``(key, value)`` pairs in key order."""
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParamPackage):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.serialize()

    def __format__(self, format_spec: str) -> str:
        return format(self.serialize(), format_spec)

    def __repr__(self) -> str:
        return f"ParamPackage({self.serialize()!r})"


# ---------------------------------------------------------------------------
# Type dispatch for get() / set()
# ---------------------------------------------------------------------------

def _or_empty_list(default: list[T] | None) -> list[T]:
    return [] if default is None else default


def _scalar_tag(value: object) -> str:
    if isinstance(value, ParamPackage):
        return "package"
    if isinstance(value, str):
        return "str"
    # bool is an int here, as in the stored form.
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    raise UnsupportedValueError(value)


def _type_tag(value: object) -> str:
    if isinstance(value, (list, tuple)):
        if not value:
            return "str_list"
        return _scalar_tag(value[0]) + "_list"
    return _scalar_tag(value)


_GETTERS: dict[str, Callable[[ParamPackage, str, Any], Any]] = {
    "str": ParamPackage.get_str,
    "int": ParamPackage.get_int,
    "float": ParamPackage.get_float,
    "package": ParamPackage.get_package,
    "str_list": ParamPackage.get_str_list,
    "int_list": ParamPackage.get_int_list,
    "float_list": ParamPackage.get_float_list,
    "package_list": ParamPackage.get_package_list,
}

_SETTERS: dict[str, Callable[[ParamPackage, str, Any], None]] = {
    "str": ParamPackage.set_str,
    "int": ParamPackage.set_int,
    "float": ParamPackage.set_float,
    "package": ParamPackage.set_package,
    "str_list": ParamPackage.set_str_list,
    "int_list": ParamPackage.set_int_list,
    "float_list": ParamPackage.set_float_list,
    "package_list": ParamPackage.set_package_list,
}
