"""String builders: duplicate, slice, join, trim, split and per-character
mapping.

Strings are treated as ending at their first NUL character, if they hold one.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from typing import Any, Optional, Union

from sigtalk.text import bounded_copy

CharLike = Union[int, str]


def _cstr(s: str) -> str:
    """Return *s* up to, not including, its first NUL character."""
    text, _ = bounded_copy(s, len(s) + 1)
    return text


def _separator(sep: CharLike) -> str:
    if isinstance(sep, bool):
        raise TypeError("expected an int or a one-character str, not bool")
    if isinstance(sep, int):
        return chr(sep & 0xFF)
    if isinstance(sep, str):
        if len(sep) != 1:
            raise ValueError(f"expected a single character, got {len(sep)} characters")
        return sep
    raise TypeError(f"expected an int or a one-character str, not {type(sep).__name__}")


def duplicate(s: str) -> str:
    """Return a copy of *s* up to its terminator."""
    return _cstr(s)


def substring(s: str, start: int, length: int) -> str:
    """Return at most *length* characters of *s* beginning at *start*.

    A start at or past the end of *s*, or a zero length, gives "".
    """
    if start < 0:
        raise ValueError("start must not be negative")
    if length < 0:
        raise ValueError("length must not be negative")
    s = _cstr(s)
    if len(s) <= start or length == 0:
        return ""
    return s[start : start + length]


def join(s1: str, s2: str) -> str:
    """Return *s1* followed by *s2*."""
    return _cstr(s1) + _cstr(s2)


def trim(s: str, charset: str) -> str:
    """Remove every leading and trailing character of *s* found in *charset*."""
    s = _cstr(s)
    charset = _cstr(charset)
    if not charset:
        return s
    return s.strip(charset)


def split(s: str, sep: CharLike) -> list[str]:
    """Split *s* on *sep*, dropping the empty pieces between repeated
    separators and at either end."""
    s = _cstr(s)
    separator = _separator(sep)
    if separator == "\0":
        return [s] if s else []
    return [piece for piece in s.split(separator) if piece]


def map_indexed(s: str, f: Callable[[int, str], str]) -> str:
    """Build a new string from ``f(index, char)`` for each character of *s*."""
    return "".join(f(index, char) for index, char in enumerate(_cstr(s)))


def _is_terminator(item: Any) -> bool:
    return (isinstance(item, int) and not isinstance(item, bool) and item == 0) or item == "\0"


def iter_indexed(buf: MutableSequence, f: Callable[[int, Any], Optional[Any]]) -> None:
    """Call ``f(index, item)`` for each item of *buf* up to its first NUL.

    A return value other than None replaces the item in place.
    """
    for index, item in enumerate(list(buf)):
        if _is_terminator(item):
            break
        replacement = f(index, item)
        if replacement is not None:
            buf[index] = replacement