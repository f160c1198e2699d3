import pytest

from minishell.environment import Environment
from minishell.expand import expand_variables
from minishell.status import status_set


@pytest.fixture
def env():
    return Environment({"HOME": "/home/user", "USER": "bob"})


def test_plain_text_unchanged(env):
    assert expand_variables("hello world", env) == "hello world"


def test_variable_replaced(env):
    assert expand_variables("$HOME", env) == "/home/user"


def test_variable_inside_text(env):
    assert expand_variables("a$USER-b", env) == "a" + "bob" + "-b"


def test_unknown_variable_is_empty(env):
    assert expand_variables("x$NOPE", env) == "x"


def test_exit_status(env):
    status_set(42)
    try:
        assert expand_variables("$?", env) == "42"
    finally:
        status_set(0)


def test_dollar_before_digit_kept(env):
    assert expand_variables("$1abc", env) == "$1abc"


def test_trailing_dollar_kept(env):
    assert expand_variables("cost$", env) == "cost$"


def test_name_stops_at_non_var_char(env):
    assert expand_variables("$USER.$HOME", env) == "bob./home/user"