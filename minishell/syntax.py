"""Syntax validation of command lines before they are parsed."""

from __future__ import annotations

import sys

from .lexer import Lexer, Token, TokenType, is_redirection
from .status import status_set

_PREFIX = "minishell: syntax error near unexpeted token `"


class ShellSyntaxError(Exception):
    """A command line that cannot be parsed; the shell reports status 2."""

    status = 2


def _unexpected(token: Token) -> ShellSyntaxError:
    return ShellSyntaxError(f"{_PREFIX}{token.literal}'")


def _check_sequence(lexer: Lexer, current: Token) -> None:
    following = lexer.peek_token()
    if current.type is TokenType.PIPE and following.type is TokenType.NULL:
        raise _unexpected(current)
    if is_redirection(current):
        if following.type is TokenType.NULL:
            raise ShellSyntaxError(f"{_PREFIX}newline`")
        if following.type not in (
            TokenType.WORD,
            TokenType.SINGLE,
            TokenType.DOUBLE,
            TokenType.INVALID,
        ):
            raise _unexpected(following)
        return
    if current.type is TokenType.PIPE and following.type is TokenType.PIPE:
        raise _unexpected(following)


def check_syntax(line):
    """Raise ShellSyntaxError if ``line`` is not a well-formed command line."""
    lexer = Lexer(line)
    tok = lexer.next_token()
    if tok.type is TokenType.PIPE:
        raise ShellSyntaxError(f"{_PREFIX}|`")
    while tok.type is not TokenType.NULL:
        if tok.type is TokenType.INVALID:
            raise ShellSyntaxError("UNMATCHED QUOTE")
        _check_sequence(lexer, tok)
        tok = lexer.next_token()


def find_error(line):
    """Report any syntax error on stderr; return True if the line must be skipped."""
    if not line:
        return True
    try:
        check_syntax(line)
    except ShellSyntaxError as exc:
        print(exc, file=sys.stderr)
        status_set(exc.status)
        return True
    return False