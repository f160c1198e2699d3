"""Tokenizer for shell command lines."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

_SPACES = " \t\n\x0b\x0c\r"
_WORD_STOPS = "|<>'\""


class TokenType(enum.IntEnum):
    NULL = 0
    PIPE = 1
    INPUT = 2
    OUTPUT = 3
    HERDOC = 4
    APPAND = 5
    WORD = 6
    DOUBLE = 7
    SINGLE = 8
    INVALID = 9


@dataclass(frozen=True)
class Token:
    """A lexical token; ``space`` tells whether whitespace preceded it."""

    type: TokenType
    literal: str
    space: bool = False


def is_space(c):
    """True for the whitespace characters a command line may contain."""
    return len(c) == 1 and c in _SPACES


def is_start_char(c):
    """True if ``c`` may start a variable name."""
    return len(c) == 1 and ((c.isascii() and c.isalpha()) or c == "_")


def is_var_char(c):
    """True if ``c`` may appear inside a variable name."""
    return len(c) == 1 and ((c.isascii() and c.isalnum()) or c == "_")


def is_redirection(token):
    """True if the token is one of the redirection operators."""
    return token.type in (
        TokenType.APPAND,
        TokenType.OUTPUT,
        TokenType.INPUT,
        TokenType.HERDOC,
    )


class Lexer:
    """Splits a command line into tokens, one at a time."""

    def __init__(self, text):
        self.text = text.split("\0", 1)[0]
        self.pos = 0

    @property
    def current(self):
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _char_after(self):
        nxt = self.pos + 1
        return self.text[nxt] if nxt < len(self.text) else ""

    def _skip_whitespace(self):
        found = False
        while is_space(self.current):
            self.pos += 1
            found = True
        return found

    def _read_redirection(self):
        c = self.current
        if self._char_after() == c:
            self.pos += 2
            kind = TokenType.HERDOC if c == "<" else TokenType.APPAND
            return kind, c * 2
        self.pos += 1
        kind = TokenType.INPUT if c == "<" else TokenType.OUTPUT
        return kind, c

    def _read_quoted(self):
        quote = self.current
        self.pos += 1
        start = self.pos
        end = self.text.find(quote, start)
        if end < 0:
            self.pos = len(self.text)
            return TokenType.INVALID, self.text[start:]
        self.pos = end + 1
        kind = TokenType.SINGLE if quote == "'" else TokenType.DOUBLE
        return kind, self.text[start:end]

    def _read_word(self):
        start = self.pos
        while True:
            c = self.current
            if not c or c in _WORD_STOPS or is_space(c):
                break
            self.pos += 1
        return TokenType.WORD, self.text[start:self.pos]

    def next_token(self):
        """Consume and return the next token."""
        space = self._skip_whitespace()
        c = self.current
        if c in ("<", ">"):
            kind, literal = self._read_redirection()
        elif c == "|":
            self.pos += 1
            kind, literal = TokenType.PIPE, "|"
        elif c == "":
            kind, literal = TokenType.NULL, ""
        elif c in ("'", '"'):
            kind, literal = self._read_quoted()
        else:
            kind, literal = self._read_word()
        return Token(kind, literal, space)

    def peek_token(self):
        """Return the next token without consuming it."""
        saved = self.pos
        try:
            return self.next_token()
        finally:
            self.pos = saved

    def tokens(self) -> Iterator[Token]:
        """Yield the remaining tokens up to the end of input."""
        while True:
            tok = self.next_token()
            if tok.type is TokenType.NULL:
                return
            yield tok