"""Turns a token stream into a list of commands, reading heredocs on the way."""

from __future__ import annotations

from .command import Command, RedirType, redir_type_for
from .environment import Environment
from .expand import expand_variables
from .lexer import Lexer, TokenType, is_redirection
from .syntax import ShellSyntaxError

_WORDLIKE = (TokenType.WORD, TokenType.SINGLE, TokenType.DOUBLE)


class HeredocInterrupted(Exception):
    """Reading a heredoc was interrupted by the user."""


def _joins_next(lexer: Lexer):
    following = lexer.peek_token()
    return following.type in _WORDLIKE and not following.space


def collect_joined_words(lexer: Lexer, env: Environment):
    """Join adjacent word tokens into one argument, expanding outside single quotes."""
    pieces = []
    while True:
        tok = lexer.next_token()
        text = tok.literal
        if tok.type is not TokenType.SINGLE and "$" in text:
            text = expand_variables(text, env)
        pieces.append(text)
        if not _joins_next(lexer):
            return "".join(pieces)


def join_heredoc_delimiter(lexer: Lexer):
    """Read a heredoc delimiter; return it and whether any part was quoted."""
    pieces = []
    quoted = False
    while True:
        tok = lexer.next_token()
        if tok.type in (TokenType.SINGLE, TokenType.DOUBLE):
            quoted = True
        pieces.append(tok.literal)
        if not _joins_next(lexer):
            return "".join(pieces), quoted


def expand_heredoc_line(line, env: Environment, quoted):
    """Return a heredoc line with a newline, expanded unless the delimiter was quoted."""
    if "$" in line and not quoted:
        line = expand_variables(line, env)
    return line + "\n"


def read_heredoc(lexer: Lexer, env: Environment, read_line=None):
    """Read lines with ``read_line`` until the delimiter and return their text.

    Raises HeredocInterrupted if reading is interrupted with Ctrl-C.
    End of input also ends the heredoc.
    """
    reader = input if read_line is None else read_line
    delimiter, quoted = join_heredoc_delimiter(lexer)
    lines = []
    while True:
        try:
            line = reader("> ")
        except KeyboardInterrupt:
            raise HeredocInterrupted() from None
        except EOFError:
            break
        if line is None or line == delimiter:
            break
        lines.append(expand_heredoc_line(line, env, quoted))
    return "".join(lines)


def _parse_redirection(lexer: Lexer, cmd: Command, env: Environment, read_line):
    tok = lexer.next_token()
    if tok.type is TokenType.HERDOC:
        cmd.add_redirection(RedirType.HERDOC, read_heredoc(lexer, env, read_line))
    else:
        cmd.add_redirection(
            redir_type_for(tok.type), collect_joined_words(lexer, env)
        )


def build_command_list(lexer: Lexer, env: Environment, read_line=None):
    """Parse the whole line into commands separated by pipes."""
    cmd = Command()
    commands = [cmd]
    while True:
        tok = lexer.peek_token()
        if tok.type in _WORDLIKE:
            cmd.add_arg(collect_joined_words(lexer, env))
        elif is_redirection(tok):
            _parse_redirection(lexer, cmd, env, read_line)
        elif tok.type is TokenType.PIPE:
            lexer.next_token()
            cmd = Command()
            commands.append(cmd)
        elif tok.type is TokenType.NULL:
            return commands
        else:
            raise ShellSyntaxError("UNMATCHED QUOTE")