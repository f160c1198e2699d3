"""Parsed simple commands and their redirections."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field

from .lexer import TokenType

_RULE = "-------------------\n"
_PIPE_SEPARATOR = "\n  --- PIPE -------------------\n\n"


class RedirType(enum.IntEnum):
    HERDOC = 0
    OUTPUT = 1
    INPUT = 2
    APPAND = 3


@dataclass
class Redirection:
    """A redirection; for a heredoc ``target`` holds the collected text."""

    type: RedirType
    target: str


@dataclass
class Command:
    """One simple command of a pipeline."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    def add_arg(self, arg):
        """Append ``arg`` to the argument list; None is ignored."""
        if arg is not None:
            self.argv.append(arg)

    def add_redirection(self, redir_type, target):
        """Append a redirection, keeping the order they were written in."""
        self.redirections.append(Redirection(RedirType(redir_type), target))

    def has_output_redirection(self):
        """True if stdout of this command is redirected to a file."""
        return any(
            r.type in (RedirType.OUTPUT, RedirType.APPAND)
            for r in self.redirections
        )


_TOKEN_TO_REDIR = {
    TokenType.HERDOC: RedirType.HERDOC,
    TokenType.INPUT: RedirType.INPUT,
    TokenType.OUTPUT: RedirType.OUTPUT,
    TokenType.APPAND: RedirType.APPAND,
}


def redir_type_for(token_type):
    """Return the redirection kind for a redirection token type."""
    try:
        return _TOKEN_TO_REDIR[TokenType(token_type)]
    except (KeyError, ValueError):
        raise ValueError(f"not a redirection token: {token_type!r}") from None


def format_commands(commands: Iterable[Command]):
    """Render a pipeline as a plain debugging listing."""
    blocks = []
    for cmd in commands:
        lines = [f"{arg}\n" for arg in cmd.argv]
        lines.extend(
            f"R_{r.type.name} {{{r.target}}}\n" for r in cmd.redirections
        )
        blocks.append("".join(lines))
    return _RULE + _PIPE_SEPARATOR.join(blocks) + _RULE