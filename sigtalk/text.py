"""String helpers with C string semantics: bounded copy and concatenation,
character and substring search, bounded comparison and integer conversion.

Strings are treated as ending at their first NUL character, if they hold one.
Searches return an index, or None when nothing is found.
"""

from __future__ import annotations

from typing import Optional, Union

from sigtalk.chars import is_digit

CharLike = Union[int, str]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_WHITESPACE = frozenset(" \t\n\v\f\r")


def _cstr(s: str) -> str:
    """Return *s* up to, not including, its first NUL character."""
    end = s.find("\0")
    return s if end < 0 else s[:end]


def _char_code(c: CharLike) -> int:
    if isinstance(c, bool):
        raise TypeError("expected an int or a one-character str, not bool")
    if isinstance(c, int):
        return c & 0xFF
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {len(c)} characters")
        return ord(c)
    raise TypeError(f"expected an int or a one-character str, not {type(c).__name__}")


def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value > INT_MAX else value


def bounded_copy(src: str, size: int) -> tuple[str, int]:
    """Copy *src* into a buffer of *size* characters, terminator included.

    Returns the copied text (at most ``size - 1`` characters) and the full
    length of *src*; a returned length of *size* or more means truncation.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    src = _cstr(src)
    if size == 0:
        return "", len(src)
    return src[: size - 1], len(src)


def bounded_concat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append *src* to *dst* within a buffer of *size* characters.

    Returns the resulting text and the length it tried to create. When
    *size* does not exceed the length of *dst*, *dst* is left unchanged and
    the length returned is ``size + len(src)``.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    dst = _cstr(dst)
    src = _cstr(src)
    if size <= len(dst):
        return dst, size + len(src)
    copied, src_len = bounded_copy(src, size - len(dst))
    return dst + copied, len(dst) + src_len


def find_char(s: str, c: CharLike) -> Optional[int]:
    """Index of the first occurrence of *c* in *s*.

    Searching for NUL finds the terminator, at index ``len(s)``.
    """
    s = _cstr(s)
    code = _char_code(c)
    if code == 0:
        return len(s)
    index = s.find(chr(code))
    return None if index < 0 else index


def rfind_char(s: str, c: CharLike) -> Optional[int]:
    """Index of the last occurrence of *c* in *s*.

    Searching for NUL finds the terminator, at index ``len(s)``.
    """
    s = _cstr(s)
    code = _char_code(c)
    if code == 0:
        return len(s)
    index = s.rfind(chr(code))
    return None if index < 0 else index


def compare_n(s1: str, s2: str, n: int) -> int:
    """Compare at most *n* characters of *s1* and *s2*.

    Returns the difference of the first pair of characters that differ,
    0 when the compared parts are equal.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    s1 = _cstr(s1)
    s2 = _cstr(s2)
    for i in range(n):
        a = ord(s1[i]) if i < len(s1) else 0
        b = ord(s2[i]) if i < len(s2) else 0
        if a != b or a == 0:
            return a - b
    return 0


def find_substring(big: str, little: str, length: int) -> Optional[int]:
    """Index of the first occurrence of *little* lying wholly within the
    first *length* characters of *big*. An empty *little* is found at 0."""
    if length < 0:
        raise ValueError("length must not be negative")
    big = _cstr(big)
    little = _cstr(little)
    if not little:
        return 0
    index = big.find(little, 0, min(length, len(big)))
    return None if index < 0 else index


def parse_int(text: str) -> int:
    """Parse a leading decimal integer the way ``atoi`` does.

    Leading whitespace is skipped, one optional sign is read, then ASCII
    digits up to the first non-digit. Text without digits gives 0. The
    result wraps around to a 32-bit signed integer.
    """
    chars = iter(_cstr(text))
    value = 0
    sign = 1
    current = next(chars, "")
    while current in _WHITESPACE and current:
        current = next(chars, "")
    if current == "-":
        sign = -1
        current = next(chars, "")
    elif current == "+":
        current = next(chars, "")
    while current and is_digit(current):
        value = value * 10 + (ord(current) - ord("0"))
        current = next(chars, "")
    return _wrap_int32(sign * value)


def int_to_str(n: int) -> str:
    """Decimal text of a 32-bit signed integer."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an int, not {type(n).__name__}")
    if not INT_MIN <= n <= INT_MAX:
        raise OverflowError(f"{n} does not fit in a 32-bit signed integer")
    if n == INT_MIN:
        return "-2147483648"
    return str(n)