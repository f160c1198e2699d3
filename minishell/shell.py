"""Interactive read-evaluate loop of the shell."""

from __future__ import annotations

import os
import signal
import sys

from .builtins import ShellExit
from .environment import Environment
from .executor import execute
from .lexer import Lexer
from .parser import HeredocInterrupted, build_command_list
from .status import status_get
from .syntax import find_error

PROMPT = "minishell: "


def process_line(line, env: Environment, read_line=None):
    """Check, parse and run one command line; return the resulting status.

    Lines with syntax errors are reported and skipped. An interrupted heredoc
    cancels the line. ShellExit from ``exit`` is passed on to the caller.
    """
    if find_error(line):
        return status_get()
    try:
        commands = build_command_list(Lexer(line), env, read_line)
    except HeredocInterrupted:
        return status_get()
    return execute(commands, env)


def _add_history(line):
    try:
        import readline
    except ImportError:
        return
    readline.add_history(line)


def _install_signals():
    saved = {}
    if hasattr(signal, "SIGQUIT"):
        saved[signal.SIGQUIT] = signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    return saved


def _restore_signals(saved):
    for signum, handler in saved.items():
        signal.signal(signum, handler)


def main(argv=None):
    """Run the interactive shell until end of input or ``exit``."""
    env = Environment.from_envp(f"{k}={v}" for k, v in os.environ.items())
    saved = _install_signals()
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                sys.stdout.write("exit\n")
                sys.stdout.flush()
                return 0
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                continue
            _add_history(line)
            try:
                process_line(line, env)
            except ShellExit as exc:
                return exc.code
            except KeyboardInterrupt:
                sys.stdout.write("\n")
    finally:
        _restore_signals(saved)


if __name__ == "__main__":
    sys.exit(main())