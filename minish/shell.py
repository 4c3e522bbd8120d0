"""The interactive loop: read a line, parse it, run it."""

from __future__ import annotations

import signal
import sys
from collections.abc import Sequence

try:
    import readline
except ImportError:  # not available on every platform
    readline = None

from minish.errors import ShellError
from minish.executor import execute
from minish.parser import parse
from minish.state import ShellState
from minish.tokens import tokenize

PROMPT = "minishell$ "


def _ignore_signal(signum, frame) -> None:
    """Swallow a signal in the shell; programs it starts get the default action."""


def setup_signals() -> None:
    """Let Ctrl+C interrupt the current line and make Ctrl+\\ do nothing."""
    signal.signal(signal.SIGINT, signal.default_int_handler)
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, _ignore_signal)


def process_line(line: str | None, state: ShellState) -> bool:
    """Run one command line; return ``False`` when input has ended (``None``)."""
    if line is None:
        sys.stdout.write("exit\n")
        sys.stdout.flush()
        return False
    if not line:
        return True
    if readline is not None:
        readline.add_history(line)
    try:
        commands = parse(tokenize(line), state.env, state.exit_status)
    except ShellError as exc:
        exc.report()
        return True
    if not commands:
        return True
    status = execute(commands, state)
    if state.running:
        state.exit_status = status
    return True


def _newline() -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the shell until ``exit`` or end of input; return the final exit status.

    Command-line arguments are ignored.
    """
    state = ShellState.from_environ()
    setup_signals()
    while state.running:
        try:
            line: str | None = input(PROMPT)
        except EOFError:
            line = None
        except KeyboardInterrupt:
            _newline()
            continue
        try:
            if not process_line(line, state):
                break
        except KeyboardInterrupt:
            _newline()
    return state.exit_status


if __name__ == "__main__":
    raise SystemExit(main())