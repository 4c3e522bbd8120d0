"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from minish.errors import print_error
from minish.state import ERROR, SUCCESS, ShellState
from minish.textutils import atoi

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_NAME_START = frozenset("_abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_NAME_REST = _NAME_START | frozenset("0123456789")

CWD_UNAVAILABLE = "impossible de récupérer le répertoire courant"
HOME_UNSET = "HOME n'est pas défini"
OLDPWD_UNSET = "OLDPWD n'est pas défini"
INVALID_IDENTIFIER = "identifiant non valable"
NUMERIC_REQUIRED = "argument numérique requis"
TOO_MANY_ARGUMENTS = "trop d'arguments"


def _out(stream: TextIO | None) -> TextIO:
    return stream if stream is not None else sys.stdout


def _err(stream: TextIO | None) -> TextIO:
    return stream if stream is not None else sys.stderr


def is_builtin(name: str | None) -> bool:
    """Whether ``name`` is one of the shell's own commands."""
    return name is not None and name in BUILTINS


def is_valid_name(name: str | None) -> bool:
    """Whether ``name`` is a valid variable name: a letter or ``_``, then letters, digits or ``_``."""
    if not name or name[0] not in _NAME_START:
        return False
    return all(ch in _NAME_REST for ch in name[1:])


def run_builtin(
    args: Sequence[str],
    state: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run the builtin named by ``args[0]`` and return its exit status."""
    if not args:
        return ERROR
    name = args[0]
    if name == "echo":
        return builtin_echo(args, out)
    if name == "cd":
        return builtin_cd(args, state, out, err)
    if name == "pwd":
        return builtin_pwd(out, err)
    if name == "export":
        return builtin_export(args, state, out, err)
    if name == "unset":
        return builtin_unset(args, state, err)
    if name == "env":
        return builtin_env(state, out)
    if name == "exit":
        return builtin_exit(args, state, out, err)
    return ERROR


def _is_n_option(arg: str) -> bool:
    return len(arg) >= 2 and arg[0] == "-" and set(arg[1:]) == {"n"}


def builtin_echo(args: Sequence[str], out: TextIO | None = None) -> int:
    """Print the arguments separated by spaces; ``-n`` options drop the newline."""
    if not args:
        return ERROR
    stream = _out(out)
    words = list(args[1:])
    newline = True
    while words and _is_n_option(words[0]):
        newline = False
        words.pop(0)
    stream.write(" ".join(words))
    if newline:
        stream.write("\n")
    stream.flush()
    return SUCCESS


def _change_directory(state: ShellState, path: str, err: TextIO) -> int:
    try:
        old_pwd = os.getcwd()
    except OSError:
        print_error("cd", CWD_UNAVAILABLE, err)
        return ERROR
    try:
        os.chdir(path)
    except OSError as exc:
        print_error("cd", exc.strerror or str(exc), err)
        return ERROR
    state.env.set("OLDPWD", old_pwd)
    try:
        state.env.set("PWD", os.getcwd())
    except OSError:
        pass
    return SUCCESS


def builtin_cd(
    args: Sequence[str],
    state: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Change directory to the argument, ``$HOME`` (none or ``~``) or ``$OLDPWD`` (``-``)."""
    if not args:
        return ERROR
    errors = _err(err)
    target = args[1] if len(args) > 1 else None
    if target is None or target == "~":
        path = state.env.get("HOME")
        if path is None:
            print_error("cd", HOME_UNSET, errors)
            return ERROR
    elif target == "-":
        path = state.env.get("OLDPWD")
        if path is None:
            print_error("cd", OLDPWD_UNSET, errors)
            return ERROR
        stream = _out(out)
        stream.write(path + "\n")
        stream.flush()
    else:
        path = target
    return _change_directory(state, path, errors)


def builtin_pwd(out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        print_error("pwd", exc.strerror or str(exc), _err(err))
        return ERROR
    stream = _out(out)
    stream.write(cwd + "\n")
    stream.flush()
    return SUCCESS


def builtin_export(
    args: Sequence[str],
    state: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set ``NAME=value`` arguments, or list the environment sorted when given none.

    Arguments without ``=`` are ignored; invalid names are reported and skipped.
    """
    if not args:
        return ERROR
    if len(args) == 1:
        stream = _out(out)
        for entry in sorted(state.env.entries(), key=lambda e: e.encode("utf-8")):
            stream.write(f"declare -x {entry}\n")
        stream.flush()
        return SUCCESS
    errors = _err(err)
    for arg in args[1:]:
        name, eq, value = arg.partition("=")
        if not eq:
            continue
        if not is_valid_name(name):
            print_error("export", INVALID_IDENTIFIER, errors)
            continue
        state.env.set(name, value)
    return SUCCESS


def builtin_unset(
    args: Sequence[str], state: ShellState, err: TextIO | None = None
) -> int:
    """Remove the named variables; invalid names are reported and make the status 1."""
    if not args:
        return ERROR
    errors = _err(err)
    status = SUCCESS
    for name in args[1:]:
        if is_valid_name(name):
            state.env.remove(name)
        else:
            print_error("unset", INVALID_IDENTIFIER, errors)
            status = ERROR
    return status


def builtin_env(state: ShellState, out: TextIO | None = None) -> int:
    """Print every environment entry that holds an ``=``."""
    stream = _out(out)
    for entry in state.env:
        if "=" in entry:
            stream.write(entry + "\n")
    stream.flush()
    return SUCCESS


def _is_numeric(text: str) -> bool:
    digits = text[1:] if text[:1] in ("-", "+") else text
    return bool(digits) and all("0" <= ch <= "9" for ch in digits)


def _truncated_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def builtin_exit(
    args: Sequence[str],
    state: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Stop the shell, with the given status or the last one.

    With more than one argument the shell keeps running and 1 is returned.
    """
    stream = _out(out)
    stream.write("exit\n")
    stream.flush()
    if not args:
        return ERROR
    errors = _err(err)
    status = state.exit_status
    if len(args) > 1:
        if not _is_numeric(args[1]):
            print_error("exit", NUMERIC_REQUIRED, errors)
        elif len(args) > 2:
            print_error("exit", TOO_MANY_ARGUMENTS, errors)
            return ERROR
        else:
            status = _truncated_mod(atoi(args[1]), 256)
    state.running = False
    state.exit_status = status
    return SUCCESS