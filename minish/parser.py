"""Syntax checking and grouping of tokens into piped commands."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from itertools import zip_longest

from minish.environment import Environment
from minish.errors import ShellError
from minish.expand import expand_variables
from minish.tokens import Token, TokenType

SYNTAX_ERROR_PIPE = "erreur de syntaxe près du symbole inattendu '|'"
SYNTAX_ERROR = "erreur de syntaxe près du symbole inattendu"

_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.HEREDOC,
    }
)
_INPUT_REDIRECTIONS = frozenset({TokenType.REDIR_IN, TokenType.HEREDOC})


class ShellSyntaxError(ShellError):
    """The token sequence is not a valid command line."""


@dataclass(frozen=True)
class Redirection:
    """A redirection of a command's input or output to a file."""

    type: TokenType
    file: str


@dataclass
class Command:
    """One command of a pipeline, with its arguments and redirections."""

    args: list[str] = field(default_factory=list)
    redir_in: list[Redirection] = field(default_factory=list)
    redir_out: list[Redirection] = field(default_factory=list)


def check_syntax(tokens: Sequence[Token]) -> None:
    """Raise ``ShellSyntaxError`` if a pipe or redirection is misplaced."""
    tokens = list(tokens)
    for current, following in zip_longest(tokens, tokens[1:]):
        if current.type is TokenType.PIPE:
            if following is None or following.type is TokenType.PIPE:
                raise ShellSyntaxError(SYNTAX_ERROR_PIPE)
        elif current.type in _REDIRECTIONS:
            if following is None or following.type is not TokenType.WORD:
                raise ShellSyntaxError(SYNTAX_ERROR)


def analyze(
    tokens: Sequence[Token], env: Environment, exit_status: int = 0
) -> list[Token]:
    """Check the syntax and return the tokens with variables expanded in words."""
    tokens = list(tokens)
    if not tokens:
        return []
    check_syntax(tokens)
    return [
        replace(token, value=expand_variables(token.value, env, exit_status))
        if token.type is TokenType.WORD and "$" in token.value
        else token
        for token in tokens
    ]


def parse(
    tokens: Sequence[Token], env: Environment, exit_status: int = 0
) -> list[Command]:
    """Turn tokens into the list of commands of a pipeline.

    An empty token sequence gives no commands. Raises ``ShellSyntaxError``
    for misplaced operators.
    """
    expanded = analyze(tokens, env, exit_status)
    if not expanded:
        return []
    commands = [Command()]
    stream = iter(expanded)
    for token in stream:
        current = commands[-1]
        if token.type is TokenType.WORD:
            current.args.append(token.value)
        elif token.type is TokenType.PIPE:
            commands.append(Command())
        elif token.type in _REDIRECTIONS:
            # check_syntax guarantees that a word follows.
            target = next(stream)
            redirection = Redirection(token.type, target.value)
            if token.type in _INPUT_REDIRECTIONS:
                current.redir_in.append(redirection)
            else:
                current.redir_out.append(redirection)
    return commands