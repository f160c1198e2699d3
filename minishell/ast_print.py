"""Tree view of a parsed pipeline, for debugging the parser."""

from __future__ import annotations

import sys
from collections.abc import Iterable

from .command import Command, RedirType

INDENT_SIZE = 8

TEXT_RESET = "\033[0m"
TEXT_RED = "\033[0;31m"
TEXT_BGREEN = "\033[1;32m"
TEXT_BBLUE = "\033[1;34m"
TEXT_UWHITE = "\033[4;37m"

_REDIR_SYMBOLS = {
    RedirType.INPUT: "<",
    RedirType.OUTPUT: ">",
    RedirType.HERDOC: ">>",
    RedirType.APPAND: ">>",
}


def redir_type_to_str(redir_type):
    """Return the operator text shown for a redirection kind."""
    try:
        return _REDIR_SYMBOLS[RedirType(redir_type)]
    except (KeyError, ValueError):
        return "?"


def _tree_line_prefix(indent, is_empty_line):
    pad = " " * INDENT_SIZE
    parts = [
        pad + ("├" if depth + 1 == indent and not is_empty_line else "│")
        for depth in range(indent)
    ]
    if is_empty_line:
        parts.append("\n")
    return "".join(parts)


def _tree_end_root(indent):
    pad = " " * INDENT_SIZE
    return "".join(pad + "│" for _ in range(indent)) + pad + "╰\n"


def _format_type(indent):
    return (
        _tree_line_prefix(indent, False)
        + TEXT_BGREEN
        + "◯───── COMMAND\n"
        + TEXT_RESET
    )


def _format_redirections(cmd: Command):
    if not cmd.redirections:
        return "(nil)\n"
    parts = []
    for i, redir in enumerate(cmd.redirections):
        colour = TEXT_RED if i % 2 else TEXT_BBLUE
        parts.append(
            f"{colour}{redir_type_to_str(redir.type)} "
            f"'{redir.target}'{TEXT_RESET} "
        )
    return "".join(parts) + "\n"


def _format_simple_command(cmd: Command, indent):
    out = [_format_type(indent)]
    indent += 1
    out.append(_tree_line_prefix(indent, True))
    out.append(_tree_line_prefix(indent, False))
    out.append(f"────── {TEXT_UWHITE}ARGS ({len(cmd.argv)}):{TEXT_RESET} ")
    if not cmd.argv:
        out.append("(nil)")
    out.extend(f"`{arg}` " for arg in cmd.argv)
    out.append("\n")
    out.append(_tree_line_prefix(indent, False))
    out.append(
        f"────── {TEXT_UWHITE}I/O ({len(cmd.redirections)}):{TEXT_RESET} "
    )
    out.append(_format_redirections(cmd))
    out.append(_tree_line_prefix(indent, True))
    return "".join(out)


def format_ast(commands: Iterable[Command]):
    """Render the commands of a pipeline as a coloured tree."""
    commands = list(commands)
    if not commands:
        return "Empty cmd\n"
    body = "".join(_format_simple_command(cmd, 0) for cmd in commands)
    return body + _tree_end_root(0)


def print_ast(commands: Iterable[Command]):
    """Write the tree view of ``commands`` to stdout."""
    sys.stdout.write(format_ast(commands))