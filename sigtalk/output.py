"""Writing characters, strings and integers to text streams."""

from __future__ import annotations

import sys
from typing import Optional, TextIO, Union

from sigtalk.text import int_to_str

CharLike = Union[int, str]


def _target(stream: Optional[TextIO]) -> TextIO:
    return sys.stdout if stream is None else stream


def put_char(c: CharLike, stream: Optional[TextIO] = None) -> None:
    """Write one character, given as a one-character str or a byte value."""
    if isinstance(c, bool):
        raise TypeError("expected an int or a one-character str, not bool")
    if isinstance(c, int):
        c = chr(c & 0xFF)
    elif not isinstance(c, str):
        raise TypeError(f"expected an int or a one-character str, not {type(c).__name__}")
    elif len(c) != 1:
        raise ValueError(f"expected a single character, got {len(c)} characters")
    _target(stream).write(c)


def put_str(s: str, stream: Optional[TextIO] = None) -> None:
    """Write *s* up to its first NUL character."""
    end = s.find("\0")
    _target(stream).write(s if end < 0 else s[:end])


def put_endl(s: str, stream: Optional[TextIO] = None) -> None:
    """Write *s* followed by a newline."""
    target = _target(stream)
    put_str(s, target)
    target.write("\n")


def put_nbr(n: int, stream: Optional[TextIO] = None) -> None:
    """Write the decimal text of a 32-bit signed integer."""
    _target(stream).write(int_to_str(n))