import pytest

from minish.environment import Environment
from minish.errors import ShellError
from minish.parser import (
    SYNTAX_ERROR,
    SYNTAX_ERROR_PIPE,
    Command,
    Redirection,
    ShellSyntaxError,
    analyze,
    check_syntax,
    parse,
)
from minish.tokens import Token, TokenType, tokenize


@pytest.fixture
def env():
    return Environment(["USER=alice", "HOME=/tmp/h"])


def test_single_command(env):
    commands = parse(tokenize("ls -l /tmp"), env)
    assert commands == [Command(args=["ls", "-l", "/tmp"])]


def test_pipeline(env):
    commands = parse(tokenize("ls -l | wc -c | cat"), env)
    assert [c.args for c in commands] == [["ls", "-l"], ["wc", "-c"], ["cat"]]


def test_redirections(env):
    commands = parse(tokenize("cat < in > out >> app"), env)
    assert len(commands) == 1
    command = commands[0]
    assert command.args == ["cat"]
    assert command.redir_in == [Redirection(TokenType.REDIR_IN, "in")]
    assert command.redir_out == [
        Redirection(TokenType.REDIR_OUT, "out"),
        Redirection(TokenType.REDIR_APPEND, "app"),
    ]


def test_heredoc_is_input_redirection(env):
    command = parse(tokenize("cat << stop"), env)[0]
    assert command.redir_in == [Redirection(TokenType.HEREDOC, "stop")]
    assert command.redir_out == []


def test_redirection_targets_are_not_args(env):
    command = parse(tokenize("echo a > f b"), env)[0]
    assert command.args == ["echo", "a", "b"]
    assert command.redir_out == [Redirection(TokenType.REDIR_OUT, "f")]


def test_redirections_belong_to_their_command(env):
    first, second = parse(tokenize("cat < in | sort > out"), env)
    assert first.redir_in == [Redirection(TokenType.REDIR_IN, "in")]
    assert first.redir_out == []
    assert second.redir_in == []
    assert second.redir_out == [Redirection(TokenType.REDIR_OUT, "out")]


def test_variables_expanded(env):
    command = parse(tokenize("echo $USER"), env)[0]
    assert command.args == ["echo", "alice"]


def test_exit_status_expanded(env):
    status = 3
    command = parse(tokenize("echo $?"), env, status)[0]
    assert command.args == ["echo", str(status)]


def test_redirection_target_expanded(env):
    command = parse(tokenize("echo hi > $HOME"), env)[0]
    assert command.redir_out == [Redirection(TokenType.REDIR_OUT, "/tmp/h")]


def test_empty_tokens(env):
    assert parse([], env) == []
    assert analyze([], env) == []


def test_leading_pipe_gives_empty_command(env):
    commands = parse(tokenize("| ls"), env)
    assert [c.args for c in commands] == [[], ["ls"]]


def test_analyze_leaves_input_tokens_alone(env):
    tokens = tokenize("echo $USER")
    result = analyze(tokens, env)
    assert tokens[1].value == "$USER"
    assert result[1] == Token(TokenType.WORD, "alice")
    assert result[0] is tokens[0]


def test_analyze_does_not_expand_operators(env):
    tokens = [Token(TokenType.WORD, "a"), Token(TokenType.PIPE, "|"), Token(TokenType.WORD, "b")]
    assert analyze(tokens, env) == tokens


@pytest.mark.parametrize("line", ["ls |", "ls | | wc", "ls ||"])
def test_bad_pipe(env, line):
    with pytest.raises(ShellSyntaxError) as info:
        parse(tokenize(line), env)
    assert info.value.msg == SYNTAX_ERROR_PIPE


@pytest.mark.parametrize("line", ["cat <", "echo >", "echo > | wc", "cat << >> f"])
def test_bad_redirection(env, line):
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(tokenize(line))
    assert info.value.msg == SYNTAX_ERROR


def test_syntax_error_is_shell_error(env):
    with pytest.raises(ShellError):
        analyze(tokenize("a |"), env)