"""Expansion of ``$NAME`` and ``$?`` inside words."""

from __future__ import annotations

from minish.environment import Environment

_VAR_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)


def is_var_char(ch: str) -> bool:
    """Whether ``ch`` may appear in a variable name."""
    return len(ch) == 1 and ch in _VAR_CHARS


def expand_variables(word: str, env: Environment, exit_status: int = 0) -> str:
    """Return ``word`` with its variables replaced by their values.

    ``$?`` becomes the exit status and ``$NAME`` the variable's value, or
    nothing when it is unset. Text between single quotes is left alone, and a
    ``$`` that starts no name stays as it is.
    """
    parts: list[str] = []
    in_quotes = False
    pos = 0
    length = len(word)
    while pos < length:
        ch = word[pos]
        following = word[pos + 1] if pos + 1 < length else ""
        if ch == "'":
            in_quotes = not in_quotes
            parts.append(ch)
            pos += 1
        elif ch == "$" and not in_quotes and following == "?":
            parts.append(str(exit_status))
            pos += 2
        elif ch == "$" and not in_quotes and following == "$":
            parts.append("$$")
            pos += 2
        elif ch == "$" and not in_quotes and is_var_char(following):
            end = pos + 1
            while end < length and is_var_char(word[end]):
                end += 1
            value = env.get(word[pos + 1:end])
            parts.append(value if value is not None else "")
            pos = end
        else:
            parts.append(ch)
            pos += 1
    return "".join(parts)