# minish

A small interactive command shell. It reads a line and splits it into
words and operators. It expands environment variables, then runs the
result. A command runs either as one of the shell's builtins or as an
external program found on `PATH`.

## Installing

    pip install .

## Running

    minish

Command-line arguments are ignored. The prompt is `minishell$ `.

- Ctrl-D on an empty line leaves the shell. It prints `exit` and ends
  with the status of the last command.
- Ctrl-C abandons the current line and shows a fresh prompt.
- Ctrl-\ is ignored by the shell.

Diagnostics go to standard error in the form `minishell: <command>: <message>`.
The message texts are in French.

## What it understands

- **Words.** Words are separated by spaces, tabs or newlines.
- **Quotes.** The tokenizer treats single quotes `'...'` and double
  quotes `"..."` the same way: the text between them becomes one word,
  spaces and operators included.
  - A quoted part ends the word it appears in.
  - Unquoted text just before the quote in the same word is dropped, so
    `ab'cd'` gives the word `cd`.
  - An unclosed quote is reported as an error and the line is not run.
- **Pipes.** For example `ls | grep py | wc -l`. The status of a
  pipeline is the status of its last command.
- **Redirections.** The shell accepts `< file`, `> file` and `>> file`.
  - Every output file named is created, or truncated for `>`.
  - When a command has several redirections in the same direction, the
    last one wins.
  - The `<<` operator is recognised, but here-documents are not
    supported: using one reports `heredoc: non implémenté`.
- **Variables.** `$NAME` is replaced by its value, or by nothing when
  the variable is unset. `$?` is replaced by the status of the last
  command.
  - `$$`, and a `$` that does not start a name, stay as they are.
  - Quotes are removed before expansion, so `'$HOME'` is still expanded.
    Only a literal `'` character inside a word stops expansion up to the
    next `'`, as in `"a'$X'b"`.

A line is a syntax error, and is not run, in three cases:

- a pipe has nothing after it;
- two pipes come in a row;
- a redirection is not followed by a word.

## Exit statuses

| Status | Meaning |
|--------|---------|
| 127 | the command was not found |
| 126 | the program could not be started |
| 128 + n | a program was killed by signal n |

## Builtins

| Command  | What it does |
|----------|--------------|
| `echo`   | Prints its arguments separated by spaces. Leading `-n` options (also `-nnn`) leave off the newline. |
| `cd`     | Changes directory and updates `PWD` and `OLDPWD`. With no argument or with `~` it goes to `$HOME`. With `-` it goes to `$OLDPWD` and prints it. |
| `pwd`    | Prints the current directory. |
| `export` | Sets each `NAME=value` argument. Arguments without `=` are ignored. Invalid names are reported. With no arguments it lists every entry, sorted, as `declare -x NAME=value`. |
| `unset`  | Removes the named variables. An invalid name is reported and makes the status 1. |
| `env`    | Prints every environment entry that has a value. |
| `exit`   | Prints `exit` and stops the shell. See below for the status. |

How `exit` chooses the status:

- With no argument, it uses the status of the last command.
- With a numeric argument, it uses that number modulo 256.
- With a non-numeric argument, it reports the error and exits with the
  last status.
- With more than one argument, it reports an error and the shell keeps
  running, with status 1.

A builtin on its own runs inside the shell and can change its state. A
builtin that is part of a pipeline works on a copy of the state. For
example, `export A=1 | cat` does not set `A`, and `exit | cat` does not
end the shell.

## Using it from Python

    from minish.state import ShellState
    from minish.shell import process_line

    state = ShellState.from_environ({"PATH": "/usr/bin:/bin", "HOME": "/tmp"})
    process_line("export GREETING=hello", state)
    process_line("echo $GREETING > out.txt", state)
    print(state.exit_status)

`process_line` returns `False` only when it is given `None`, which
stands for end of input. `state.running` becomes `False` after a
successful `exit`.

The pieces can also be used one at a time:

- `minish.tokens.tokenize` turns a line into `Token`s.
- `minish.parser.parse` turns tokens into `Command`s.
- `minish.executor.execute` runs them and returns the status.
- `minish.environment.Environment` holds the ordered `NAME=value`
  entries.

## What it does not do

There are no here-documents. There is no `;`, `&&`, `||` or `&`: these
characters are treated as ordinary word characters. There is also no
globbing, no job control, and no script files.