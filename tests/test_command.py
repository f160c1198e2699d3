import pytest

from minishell.command import (
    Command,
    RedirType,
    Redirection,
    format_commands,
    redir_type_for,
)
from minishell.lexer import TokenType


def test_add_arg_keeps_order_and_ignores_none():
    cmd = Command()
    cmd.add_arg("ls")
    cmd.add_arg(None)
    cmd.add_arg("-l")
    assert cmd.argv == ["ls", "-l"]


def test_add_redirection_keeps_order():
    cmd = Command()
    cmd.add_redirection(RedirType.INPUT, "in")
    cmd.add_redirection(RedirType.OUTPUT, "out")
    assert cmd.redirections == [
        Redirection(RedirType.INPUT, "in"),
        Redirection(RedirType.OUTPUT, "out"),
    ]


@pytest.mark.parametrize(
    "kind, expected",
    [
        (RedirType.OUTPUT, True),
        (RedirType.APPAND, True),
        (RedirType.INPUT, False),
        (RedirType.HERDOC, False),
    ],
)
def test_has_output_redirection(kind, expected):
    cmd = Command()
    cmd.add_redirection(kind, "f")
    assert cmd.has_output_redirection() is expected


def test_no_redirection_means_no_output():
    assert Command(["ls"]).has_output_redirection() is False


@pytest.mark.parametrize(
    "token_type, expected",
    [
        (TokenType.HERDOC, RedirType.HERDOC),
        (TokenType.INPUT, RedirType.INPUT),
        (TokenType.OUTPUT, RedirType.OUTPUT),
        (TokenType.APPAND, RedirType.APPAND),
    ],
)
def test_redir_type_for(token_type, expected):
    assert redir_type_for(token_type) is expected


def test_redir_type_for_rejects_word():
    with pytest.raises(ValueError):
        redir_type_for(TokenType.WORD)


def test_format_single_command():
    cmd = Command(["ls", "-l"])
    cmd.add_redirection(RedirType.OUTPUT, "out")
    text = format_commands([cmd])
    assert text == "-------------------\nls\n-l\nR_OUTPUT {out}\n-------------------\n"


def test_format_pipeline_has_separator():
    text = format_commands([Command(["ls"]), Command(["wc"])])
    assert "ls\n\n  --- PIPE -------------------\n\nwc\n" in text
    assert text.startswith("-------------------\n")
    assert text.endswith("-------------------\n")