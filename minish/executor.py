"""Running parsed commands: builtins inside the shell, programs as child processes."""

from __future__ import annotations

import errno
import os
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from contextlib import ExitStack
from typing import IO, Any, TextIO

from minish.builtins import is_builtin, run_builtin
from minish.environment import Environment
from minish.errors import ShellError, print_error
from minish.parser import Command
from minish.state import ERROR, ShellState
from minish.textutils import split_fields
from minish.tokens import TokenType

NO_SUCH_FILE = "aucun fichier ou dossier de ce type"
COMMAND_NOT_FOUND = "commande introuvable"
NOT_IMPLEMENTED = "non implémenté"

COMMAND_NOT_FOUND_STATUS = 127
CANNOT_EXECUTE_STATUS = 126
SIGNAL_STATUS_BASE = 128


class RedirectionError(ShellError):
    """A redirection could not be set up."""


def _looks_like_path(name: str) -> bool:
    return name[:1] in ("/", ".")


def _is_executable(path: str) -> bool:
    return os.access(path, os.F_OK | os.X_OK)


def find_executable(
    name: str, env: Environment, err: TextIO | None = None
) -> str | None:
    """Return the path of the program ``name``, or ``None`` after reporting why not.

    Names starting with ``/`` or ``.`` are used as they are; other names are
    looked up in the directories of ``$PATH``.
    """
    if _looks_like_path(name):
        if _is_executable(name):
            return name
        code = errno.EACCES if os.path.exists(name) else errno.ENOENT
        print_error(name, os.strerror(code), err)
        return None
    path_var = env.get("PATH")
    if path_var is None:
        print_error(name, NO_SUCH_FILE, err)
        return None
    for directory in split_fields(path_var, ":"):
        candidate = f"{directory}/{name}"
        if _is_executable(candidate):
            return candidate
    print_error(name, COMMAND_NOT_FOUND, err)
    return None


def _create_file(path: str, flags: int) -> int:
    return os.open(path, flags, 0o644)


def _open(path: str, mode: str) -> IO[Any]:
    try:
        if "b" in mode:
            return open(path, mode)
        return open(path, mode, encoding="utf-8", opener=_create_file)
    except OSError as exc:
        raise RedirectionError(exc.strerror or str(exc), path) from exc


def open_redirections(
    command: Command, stack: ExitStack
) -> tuple[IO[bytes] | None, TextIO | None]:
    """Open the command's redirection files in order and return its (stdin, stdout).

    Every file is opened, so output files are all created or truncated; the
    last one of each direction wins. Files are closed when ``stack`` closes.
    Raises ``RedirectionError`` when a file cannot be opened or for a heredoc.
    """
    stdin: IO[bytes] | None = None
    for redir in command.redir_in:
        if redir.type is TokenType.HEREDOC:
            raise RedirectionError(NOT_IMPLEMENTED, "heredoc")
        stdin = stack.enter_context(_open(redir.file, "rb"))
    stdout: TextIO | None = None
    for redir in command.redir_out:
        mode = "a" if redir.type is TokenType.REDIR_APPEND else "w"
        stdout = stack.enter_context(_open(redir.file, mode))
    return stdin, stdout


def _release(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if close is not None:
        close()


def _status_of(result: int | subprocess.Popen) -> int:
    if isinstance(result, int):
        return result
    code = result.wait()
    if code < 0:
        return SIGNAL_STATUS_BASE - code
    return code


def _run_single_builtin(command: Command, state: ShellState) -> int:
    with ExitStack() as stack:
        try:
            _, stdout = open_redirections(command, stack)
        except RedirectionError as exc:
            exc.report()
            return ERROR
        return run_builtin(command.args, state, out=stdout)


def _run_pipeline(commands: list[Command], state: ShellState) -> int:
    results: list[int | subprocess.Popen] = []
    upstream: Any = None
    with ExitStack() as stack:
        for index, command in enumerate(commands):
            last = index == len(commands) - 1
            incoming, upstream = upstream, None
            try:
                try:
                    redir_in, redir_out = open_redirections(command, stack)
                except RedirectionError as exc:
                    exc.report()
                    results.append(ERROR)
                    continue

                if not command.args:
                    results.append(ERROR)
                    continue

                if is_builtin(command.args[0]):
                    # A builtin in a pipeline cannot change the shell itself.
                    scratch = ShellState(
                        env=state.env.copy(), exit_status=state.exit_status
                    )
                    out: TextIO | None = redir_out
                    buffer: TextIO | None = None
                    if out is None and not last:
                        buffer = stack.enter_context(
                            tempfile.TemporaryFile("w+", encoding="utf-8")
                        )
                        out = buffer
                    results.append(run_builtin(command.args, scratch, out=out))
                    if buffer is not None:
                        buffer.flush()
                        buffer.seek(0)
                        upstream = buffer
                    continue

                path = find_executable(command.args[0], state.env)
                if path is None:
                    results.append(COMMAND_NOT_FOUND_STATUS)
                    continue

                if redir_in is not None:
                    stdin: Any = redir_in
                elif incoming is not None:
                    stdin = incoming
                else:
                    stdin = None if index == 0 else subprocess.DEVNULL
                if redir_out is not None:
                    stdout: Any = redir_out
                else:
                    stdout = None if last else subprocess.PIPE

                try:
                    process = subprocess.Popen(
                        list(command.args),
                        executable=path,
                        stdin=stdin,
                        stdout=stdout,
                        env=state.env.to_dict(),
                    )
                except OSError as exc:
                    print_error(command.args[0], exc.strerror or str(exc))
                    results.append(CANNOT_EXECUTE_STATUS)
                    continue
                state.last_pid = process.pid
                results.append(process)
                if stdout is subprocess.PIPE:
                    upstream = process.stdout
            finally:
                _release(incoming)
        _release(upstream)
        statuses = [_status_of(result) for result in results]
    return statuses[-1] if statuses else ERROR


def execute(commands: Sequence[Command], state: ShellState) -> int:
    """Run a pipeline of commands and return the exit status of the last one.

    A lone builtin runs inside the shell and may change its state; every
    other command runs as a child process, connected to its neighbours by pipes.
    """
    commands = list(commands)
    if not commands:
        return ERROR
    sys.stdout.flush()
    first = commands[0]
    if len(commands) == 1 and first.args and is_builtin(first.args[0]):
        return _run_single_builtin(first, state)
    return _run_pipeline(commands, state)