"""Small string helpers shared by the shell: integer parsing, field splitting, ordering."""

from __future__ import annotations

_LEADING_SPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does.

    Leading whitespace is skipped, one optional sign is accepted, and
    parsing stops at the first non-digit. Text with no digits gives 0.
    """
    rest = text.lstrip(_LEADING_SPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = []
    for ch in rest:
        if not ("0" <= ch <= "9"):
            break
        digits.append(ch)
    if not digits:
        return 0
    return sign * int("".join(digits))


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping the empty fields between repeated separators."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [field for field in text.split(sep) if field]


def compare(a: str | None, b: str | None) -> int:
    """Compare two strings byte by byte, returning the difference at the first mismatch.

    The result is negative, zero or positive as ``a`` sorts before, equal to
    or after ``b``. ``None`` sorts before any string and equals only itself.
    """
    if a is None or b is None:
        if a is b:
            return 0
        return 1 if a is not None else -1
    left = a.encode("utf-8")
    right = b.encode("utf-8")
    for x, y in zip(left, right):
        if x != y:
            return x - y
    if len(left) == len(right):
        return 0
    if len(left) > len(right):
        return left[len(right)]
    return -right[len(left)]