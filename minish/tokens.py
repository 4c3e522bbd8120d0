"""Splitting a command line into words and operator tokens."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from minish.errors import ShellError

UNCLOSED_QUOTE = "guillemet non fermé"

_SPACES = " \t\n"
_QUOTES = "'\""
_WORD_STOPPERS = _SPACES + "|<>"


class TokenType(enum.Enum):
    """Kinds of token produced by the tokenizer."""

    WORD = "word"
    PIPE = "pipe"
    REDIR_IN = "redir_in"
    REDIR_OUT = "redir_out"
    REDIR_APPEND = "redir_append"
    HEREDOC = "heredoc"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """One token of a command line."""

    type: TokenType
    value: str


class UnclosedQuoteError(ShellError):
    """A quote was opened and never closed."""

    def __init__(self) -> None:
        super().__init__(UNCLOSED_QUOTE)


# Two-character operators come before their one-character prefixes.
_OPERATORS: tuple[tuple[str, TokenType], ...] = (
    ("|", TokenType.PIPE),
    ("<<", TokenType.HEREDOC),
    (">>", TokenType.REDIR_APPEND),
    ("<", TokenType.REDIR_IN),
    (">", TokenType.REDIR_OUT),
)


def read_quoted(text: str, pos: int) -> tuple[str, int]:
    """Read the quoted string that starts at ``pos``.

    Returns the text between the quotes and the position just past the
    closing quote. Raises ``UnclosedQuoteError`` when there is no closing
    quote and ``ValueError`` when ``pos`` is not on a quote.
    """
    if pos >= len(text) or text[pos] not in _QUOTES:
        raise ValueError(f"no quote at position {pos}")
    quote = text[pos]
    end = text.find(quote, pos + 1)
    if end == -1:
        raise UnclosedQuoteError()
    return text[pos + 1:end], end + 1


def _read_word(text: str, pos: int) -> tuple[Token, int]:
    start = pos
    while pos < len(text) and text[pos] not in _WORD_STOPPERS:
        if text[pos] in _QUOTES:
            # A quoted part ends the word; what came before it is dropped.
            value, pos = read_quoted(text, pos)
            return Token(TokenType.WORD, value), pos
        pos += 1
    return Token(TokenType.WORD, text[start:pos]), pos


def _iter_tokens(text: str) -> Iterator[Token]:
    pos = 0
    while pos < len(text):
        if text[pos] in _SPACES:
            pos += 1
            continue
        for lexeme, kind in _OPERATORS:
            if text.startswith(lexeme, pos):
                yield Token(kind, lexeme)
                pos += len(lexeme)
                break
        else:
            token, pos = _read_word(text, pos)
            yield token


def tokenize(text: str) -> list[Token]:
    """Split a command line into tokens.

    Raises ``UnclosedQuoteError`` if a quote is left open.
    """
    return list(_iter_tokens(text))