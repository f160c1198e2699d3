import io

import pytest

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.shell import main, process_line
from minishell.status import status_get, status_set


@pytest.fixture(autouse=True)
def reset_status():
    status_set(0)
    yield
    status_set(0)


def test_echo_builtin(capsys):
    env = Environment()
    assert process_line("echo hello world", env) == 0
    assert capsys.readouterr().out == "hello world\n"


def test_variable_expansion(capsys):
    env = Environment({"X": "value"})
    process_line('echo "$X"', env)
    assert capsys.readouterr().out == "value\n"


def test_export_changes_environment():
    env = Environment()
    process_line("export NAME=abc", env)
    assert env.get("NAME") == "abc"


def test_syntax_error_sets_status_two(capsys):
    env = Environment()
    assert process_line("| ls", env) == 2
    assert status_get() == 2
    assert "syntax error" in capsys.readouterr().err


def test_empty_line_keeps_status():
    status_set(7)
    assert process_line("", Environment()) == 7


def test_exit_raises_with_code():
    with pytest.raises(ShellExit) as info:
        process_line("exit 3", Environment())
    assert info.value.code == 3


def test_interrupted_heredoc_cancels_line(capsys):
    def interrupt(prompt):
        raise KeyboardInterrupt

    status_set(4)
    env = Environment()
    assert process_line("echo run << EOF", env, interrupt) == 4
    assert "run" not in capsys.readouterr().out


def test_main_runs_until_eof(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("export QQ=42\necho $QQ\n"))
    assert main() == 0
    out = capsys.readouterr().out
    assert "42\n" in out
    assert out.endswith("exit\n")


def test_main_exit_code(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("exit 5\necho never\n"))
    assert main() == 5
    assert "never" not in capsys.readouterr().out