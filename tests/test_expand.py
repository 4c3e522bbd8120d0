import pytest

from minish.environment import Environment
from minish.expand import expand_variables, is_var_char


@pytest.fixture
def env():
    return Environment(["HOME=/tmp/h", "A=x", "B=y", "EMPTY="])


@pytest.mark.parametrize("ch", ["a", "Z", "0", "9", "_"])
def test_var_chars(ch):
    assert is_var_char(ch) is True


@pytest.mark.parametrize("ch", ["$", "-", " ", "?", "", "é", "ab"])
def test_non_var_chars(ch):
    assert is_var_char(ch) is False


def test_plain_word_unchanged(env):
    assert expand_variables("hello", env) == "hello"


def test_variable_replaced(env):
    assert expand_variables("$HOME", env) == "/tmp/h"


def test_variable_followed_by_text(env):
    assert expand_variables("$HOME/bin", env) == "/tmp/h" + "/bin"


def test_unset_variable_vanishes(env):
    assert expand_variables("a-$NOPE-b", env) == "a--b"


def test_empty_variable(env):
    assert expand_variables("[$EMPTY]", env) == "[" + "]"


def test_exit_status(env):
    status = 42
    assert expand_variables("$?", env, status) == str(status)


def test_exit_status_in_text(env):
    status = 7
    assert expand_variables("code=$?", env, status) == "code=" + str(status)


def test_adjacent_variables(env):
    assert expand_variables("$A$B", env) == "xy"


def test_single_quotes_block_expansion(env):
    assert expand_variables("'$HOME'", env) == "'$HOME'"


def test_expansion_after_closed_quote(env):
    assert expand_variables("'a' $HOME", env) == "'a' " + "/tmp/h"


@pytest.mark.parametrize("word", ["$", "cost $ 5", "$-", "a$"])
def test_lone_dollar_kept(env, word):
    assert expand_variables(word, env) == word


def test_double_dollar_kept(env):
    assert expand_variables("$$", env) == "$$"


def test_value_containing_dollar_not_reexpanded():
    env = Environment(["V=$HOME", "HOME=/h"])
    assert expand_variables("$V", env) == "$HOME"