"""Expansion of ``$NAME`` and ``$?`` references inside words."""

from __future__ import annotations

from .environment import Environment
from .lexer import is_start_char, is_var_char
from .status import status_get


def expand_variables(text, env: Environment):
    """Return ``text`` with ``$?`` and ``$NAME`` replaced by their values.

    Unknown variables expand to nothing; a ``$`` that does not start a
    variable name is kept as it is.
    """
    parts: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        c = text[i]
        nxt = text[i + 1] if i + 1 < length else ""
        if c == "$" and nxt == "?":
            parts.append(str(status_get()))
            i += 2
        elif c == "$" and is_start_char(nxt):
            end = i + 1
            while end < length and is_var_char(text[end]):
                end += 1
            value = env.get(text[i + 1:end])
            if value is not None:
                parts.append(value)
            i = end
        else:
            parts.append(c)
            i += 1
    return "".join(parts)