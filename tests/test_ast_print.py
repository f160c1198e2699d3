from minishell.ast_print import (
    INDENT_SIZE,
    TEXT_BGREEN,
    format_ast,
    print_ast,
    redir_type_to_str,
)
from minishell.command import Command, RedirType


def test_empty_pipeline():
    assert format_ast([]) == "Empty cmd\n"


def test_redir_symbols():
    assert redir_type_to_str(RedirType.INPUT) == "<"
    assert redir_type_to_str(RedirType.OUTPUT) == ">"
    assert redir_type_to_str(RedirType.APPAND) == ">>"
    assert redir_type_to_str(RedirType.HERDOC) == ">>"


def test_arguments_listed_in_order():
    text = format_ast([Command(argv=["ls", "-l"])])
    assert "ARGS (2):" in text
    assert "`ls` `-l` " in text
    assert text.index("`ls`") < text.index("`-l`")


def test_starts_with_command_header_and_ends_with_root():
    text = format_ast([Command(argv=["pwd"])])
    assert text.startswith(TEXT_BGREEN + "◯───── COMMAND\n")
    assert text.endswith(" " * INDENT_SIZE + "╰\n")


def test_one_header_per_command():
    cmds = [Command(argv=["a"]), Command(argv=["b"]), Command(argv=["c"])]
    assert format_ast(cmds).count("COMMAND") == len(cmds)


def test_missing_args_and_redirections_show_nil():
    text = format_ast([Command()])
    assert "ARGS (0):" in text
    assert text.count("(nil)") == 2


def test_redirection_targets_shown():
    cmd = Command(argv=["cat"])
    cmd.add_redirection(RedirType.INPUT, "in.txt")
    cmd.add_redirection(RedirType.OUTPUT, "out.txt")
    text = format_ast([cmd])
    assert "< 'in.txt'" in text
    assert "> 'out.txt'" in text
    assert "(nil)" not in text


def test_print_ast_writes_format(capsys):
    cmds = [Command(argv=["echo", "hi"])]
    print_ast(cmds)
    assert capsys.readouterr().out == format_ast(cmds)