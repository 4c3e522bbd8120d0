"""Error reporting for the shell."""

from __future__ import annotations

import sys
from typing import TextIO

PROGRAM_NAME = "minishell"


def format_error(cmd: str | None, msg: str) -> str:
    """Return the diagnostic line for ``msg``, prefixed with the command when given."""
    if cmd:
        return f"{PROGRAM_NAME}: {cmd}: {msg}"
    return f"{PROGRAM_NAME}: {msg}"


def print_error(cmd: str | None, msg: str, stream: TextIO | None = None) -> None:
    """Write a diagnostic line to ``stream`` (standard error by default)."""
    target = stream if stream is not None else sys.stderr
    target.write(format_error(cmd, msg) + "\n")
    target.flush()


class ShellError(Exception):
    """An error the shell reports to the user and then carries on from."""

    def __init__(self, msg: str, cmd: str | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.cmd = cmd

    def __str__(self) -> str:
        return format_error(self.cmd, self.msg)

    def report(self, stream: TextIO | None = None) -> None:
        """Print this error as a diagnostic line."""
        print_error(self.cmd, self.msg, stream)