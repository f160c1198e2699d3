"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys

from .environment import Environment
from .status import status_get, status_set

_LLONG_MAX = 2**63 - 1
_SIZE_MOD = 2**64
_ASCII_DIGITS = "0123456789"
_ATOI_SPACES = " \t\n\x0b\x0c\r"


class ShellExit(Exception):
    """Raised by ``exit``: the shell must terminate with ``code``."""

    def __init__(self, code):
        super().__init__(code)
        self.code = code


def _to_int32(value):
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def atoi(text):
    """Parse a leading decimal integer the way the shell's ``exit`` does.

    Leading whitespace and one sign are accepted; parsing stops at the first
    non-digit. Values past the 64-bit range give -1 (positive) or 0
    (negative); the result is truncated to a 32-bit signed integer.
    """
    i = 0
    length = len(text)
    while i < length and text[i] in _ATOI_SPACES:
        i += 1
    sign = 1
    if i < length and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    result = 0
    while i < length and text[i] in _ASCII_DIGITS:
        result = (result * 10 + int(text[i])) % _SIZE_MOD
        if result > _LLONG_MAX:
            return 0 if sign == -1 else -1
        i += 1
    return _to_int32((sign * result) % _SIZE_MOD)


def is_numeric(text):
    """True if ``text`` is an optional sign followed only by ASCII digits."""
    if not text:
        return False
    if text[0] in "+-":
        text = text[1:]
    return all(c in _ASCII_DIGITS for c in text)


def _is_name_char(c):
    return c.isascii() and (c.isalnum() or c == "_")


def is_valid_identifier(arg):
    """True if the part of ``arg`` before ``=`` is a valid variable name."""
    if not arg:
        return False
    first = arg[0]
    if not (first.isascii() and first.isalpha()) and first != "_":
        return False
    name = arg.split("=", 1)[0]
    return all(_is_name_char(c) for c in name)


def _out(stream):
    return sys.stdout if stream is None else stream


def _err(stream):
    return sys.stderr if stream is None else stream


def do_echo(args, stdout=None):
    """Print the arguments separated by spaces; leading ``-n`` drops the newline."""
    out = _out(stdout)
    words = list(args[1:])
    newline = True
    while words and words[0] == "-n":
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def do_cd(args, env: Environment, stderr=None):
    """Change the working directory to the argument, or to ``$HOME``."""
    err = _err(stderr)
    if len(args) < 2:
        path = env.get("HOME")
        if path is None:
            sys.stdout.write("cd: HOME not set\n")
            return 1
    elif len(args) > 2:
        err.write("minishell: cd: too many arguments\n")
        status_set(1)
        return status_get()
    else:
        path = args[1]
    try:
        os.chdir(path)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        err.write(f"minishell: cd: {path}: {reason}\n")
        status_set(1)
        return status_get()
    return 0


def do_pwd(args, stdout=None):
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        return 1
    _out(stdout).write(f"{cwd}\n")
    return 0


def do_env(args, env: Environment, stdout=None):
    """Print every variable as ``NAME=value``."""
    out = _out(stdout)
    for name, value in env.items():
        out.write(f"{name}={value}\n")
    return 0


def _display_export(env: Environment, out):
    for name, value in env.items():
        out.write(f'declare -x {name}="{value}"\n')
    return 0


def do_export(args, env: Environment, stdout=None, stderr=None):
    """Define variables from ``NAME=value`` arguments, or list them all."""
    if len(args) < 2:
        return _display_export(env, _out(stdout))
    err = _err(stderr)
    all_valid = True
    for arg in args[1:]:
        if not is_valid_identifier(arg):
            err.write(f"minishell: export: `{arg}`: not a valid identifier\n")
            all_valid = False
            continue
        name, sep, value = arg.partition("=")
        if sep:
            env.set(name, value)
    status_set(0 if all_valid else 1)
    return status_get()


def do_unset(args, env: Environment):
    """Remove each named variable."""
    for name in args[1:]:
        env.unset(name)
    return 0


def do_exit(args, stdout=None):
    """Print ``exit`` and raise ShellExit with the requested code."""
    out = _out(stdout)
    out.write("exit\n")
    if len(args) < 2:
        raise ShellExit(status_get())
    if not is_numeric(args[1]):
        out.write(f"minishell: exit: {args[1]}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 2:
        out.write("minishell: exit: too many arguments\n")
        status_set(1)
    raise ShellExit(atoi(args[1]) & 0xFF)