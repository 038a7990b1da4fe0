"""Text-level codec: escaping, splitting and placeholder substitution.

Every function here is pure.  Placeholder lookup tables are created by the
caller and passed in explicitly, one table per decode pass.
"""

from __future__ import annotations

import re

from .model import (
    EMPTY_PLACEHOLDER,
    ESCAPE_CHARACTER,
    ESCAPE_CHARACTER_ESCAPE,
    KEY_VALUE_SEPARATOR,
    KEY_VALUE_SEPARATOR_ESCAPE,
    LIST_CLOSE,
    LIST_OPEN,
    LIST_SEPARATOR,
    PARAM_SEPARATOR,
    PARAM_SEPARATOR_ESCAPE,
    PLACEHOLDER_PREFIX,
    ValueKind,
)

# Innermost bracketed region: no bracket between "[" and "]".
_LIST_RE = re.compile(r"\[[^\[\]]*\]")
_PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER_PREFIX) + r"(\d+)")


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

def escape(text: str) -> str:
    """Escape ``$``, ``,`` and ``:`` in that order."""
    text = text.replace(ESCAPE_CHARACTER, ESCAPE_CHARACTER_ESCAPE)
    text = text.replace(PARAM_SEPARATOR, PARAM_SEPARATOR_ESCAPE)
    return text.replace(KEY_VALUE_SEPARATOR, KEY_VALUE_SEPARATOR_ESCAPE)


def unescape(text: str) -> str:
    """Reverse :func:`escape`: ``$0`` → ``:``, ``$1`` → ``,``, ``$2`` → ``$``."""
    text = text.replace(KEY_VALUE_SEPARATOR_ESCAPE, KEY_VALUE_SEPARATOR)
    text = text.replace(PARAM_SEPARATOR_ESCAPE, PARAM_SEPARATOR)
    return text.replace(ESCAPE_CHARACTER_ESCAPE, ESCAPE_CHARACTER)


# ---------------------------------------------------------------------------
# Brackets and splitting
# ---------------------------------------------------------------------------

def is_bracketed(text: str) -> bool:
    return len(text) >= 2 and text.startswith(LIST_OPEN) and text.endswith(LIST_CLOSE)


def is_single_region(text: str) -> bool:
    """True if *text* is one balanced region: its first ``[`` closes last.

    ``[a|[b]]`` is one region; ``[x],y:[z]`` is two regions joined by
    scalar text.
    """
    if not is_bracketed(text):
        return False
    depth = 0
    for i, ch in enumerate(text):
        if ch == LIST_OPEN:
            depth += 1
        elif ch == LIST_CLOSE:
            depth -= 1
            if depth == 0:
                return i == len(text) - 1
    return False


def strip_brackets(text: str) -> str:
    """Remove one pair of enclosing brackets; *text* must be bracketed."""
    return text[1:-1]


def split_fields(text: str, sep: str) -> list[str]:
    """Split on *sep*, keeping empty fields.  ``""`` yields no fields."""
    if not text:
        return []
    return text.split(sep)


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------

def placeholderify(text: str, lookup: list[str]) -> str:
    """Replace bracketed regions with ``##N`` tokens, innermost first.

    Each replaced region is appended to *lookup*; its index is ``N``.
    Regions enclosing already-replaced ones refer to them by token.
    """
    while True:
        m = _LIST_RE.search(text)
        if m is None:
            return text
        token = f"{PLACEHOLDER_PREFIX}{len(lookup)}"
        lookup.append(m.group(0))
        text = text[: m.start()] + token + text[m.end():]


def replace_placeholders(text: str, lookup: list[str]) -> str:
    """Expand every ``##N`` token in *text* using *lookup*.

    Expansion is transitive.  A token naming an index past the end of
    *lookup* is left as literal text.
    """
    if not lookup:
        return text
    resolved: list[str] = []
    for entry in lookup:
        # Entry N only refers to indices below N.
        resolved.append(_PLACEHOLDER_RE.sub(lambda m: _resolve(m, resolved), entry))
    return _PLACEHOLDER_RE.sub(lambda m: _resolve(m, resolved), text)


def _resolve(m: re.Match, resolved: list[str]) -> str:
    idx = int(m.group(1))
    if idx < len(resolved):
        return resolved[idx]
    return m.group(0)


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------

def classify(value: str) -> ValueKind:
    """Judge the outer shape of a stored value, one level deep.

    A one-key package and a one-item list are indistinguishable on the
    wire; both come back as ``ValueKind.Unit``.
    """
    if not is_bracketed(value):
        return ValueKind.Scalar
    inner = strip_brackets(value)
    if inner == EMPTY_PLACEHOLDER:
        return ValueKind.Package
    outer = placeholderify(inner, [])
    has_list = LIST_SEPARATOR in outer
    has_param = PARAM_SEPARATOR in outer
    if has_list and has_param:
        return ValueKind.PackageList
    if has_list:
        return ValueKind.List
    if has_param:
        return ValueKind.Package
    return ValueKind.Unit
