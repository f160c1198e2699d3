"""Runs parsed commands: builtins in the shell, everything else as child processes."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable, Iterable, Iterator
from contextlib import ExitStack, contextmanager
from typing import BinaryIO, Optional

from .builtins import (
    ShellExit,
    do_cd,
    do_echo,
    do_env,
    do_exit,
    do_export,
    do_pwd,
    do_unset,
)
from .command import Command, RedirType
from .environment import Environment
from .status import status_get, status_set

_BUILTINS = frozenset({"cd", "echo", "pwd", "exit", "env", "export", "unset"})

_OPEN_MODES = {
    RedirType.INPUT: (os.O_RDONLY, "rb"),
    RedirType.OUTPUT: (os.O_CREAT | os.O_WRONLY | os.O_TRUNC, "wb"),
    RedirType.APPAND: (os.O_CREAT | os.O_WRONLY | os.O_APPEND, "ab"),
}

_Waiter = Callable[[], Optional[int]]


class RedirectionError(Exception):
    """A redirection target could not be opened."""


def is_builtin(argv):
    """True if ``argv`` names a command the shell runs itself."""
    return bool(argv) and argv[0] in _BUILTINS


def exec_builtin(argv, env: Environment, stdout=None, stderr=None):
    """Run the builtin named by ``argv[0]`` and return its exit status.

    ``exit`` raises ShellExit.
    """
    name = argv[0] if argv else ""
    handlers = {
        "cd": lambda: do_cd(argv, env, stderr),
        "echo": lambda: do_echo(argv, stdout),
        "pwd": lambda: do_pwd(argv, stdout),
        "exit": lambda: do_exit(argv, stdout),
        "env": lambda: do_env(argv, env, stdout),
        "export": lambda: do_export(argv, env, stdout, stderr),
        "unset": lambda: do_unset(argv, env),
    }
    try:
        handler = handlers[name]
    except KeyError:
        raise ValueError(f"not a builtin: {name!r}") from None
    return handler()


def strip_empty_args(command: Command):
    """Drop the empty arguments at the start of ``command.argv`` and return it."""
    argv = command.argv
    leading = 0
    while leading < len(argv) and argv[leading] == "":
        leading += 1
    del argv[:leading]
    return argv


def find_command_path(name, env: Environment):
    """Locate ``name`` in ``$PATH``.

    A name containing ``/``, or any name when PATH is unset, is returned as
    it is. Returns None when no directory holds an executable of that name.
    """
    path_env = env.get("PATH")
    if path_env is None or "/" in name:
        return name
    for directory in filter(None, path_env.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def _open_target(target, flags, mode) -> BinaryIO:
    try:
        fd = os.open(target, flags, 0o644)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise RedirectionError(f"minishell: {target}: {reason}") from None
    return os.fdopen(fd, mode, buffering=0)


@contextmanager
def apply_redirections(redirections) -> Iterator[tuple]:
    """Open the redirection targets in order and yield ``(stdin, stdout)``.

    Each is a binary file, or None when that stream is not redirected; a
    later redirection of the same stream wins. Heredocs are not applied.
    Raises RedirectionError at the first target that cannot be opened.
    """
    stdin = stdout = None
    with ExitStack() as stack:
        for redir in redirections:
            spec = _OPEN_MODES.get(redir.type)
            if spec is None:
                continue
            flags, mode = spec
            handle = stack.enter_context(_open_target(redir.target, flags, mode))
            if redir.type is RedirType.INPUT:
                stdin = handle
            else:
                stdout = handle
        yield stdin, stdout


def _report(message):
    sys.stderr.write(f"{message}\n")
    sys.stderr.flush()


def _write_to(fd, text):
    if fd is None:
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        os.write(fd, text.encode())


def _finished(status) -> _Waiter:
    return lambda: status


def _wait_pid(pid):
    _, status = os.waitpid(pid, 0)
    return os.WEXITSTATUS(status) if os.WIFEXITED(status) else None


def _wait_process(proc: subprocess.Popen):
    code = proc.wait()
    return code if code >= 0 else None


def _fork_builtin(argv, env, in_fd, out_fd, pipe_fds) -> _Waiter:
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid:
        return lambda: _wait_pid(pid)
    code = 0
    try:
        if in_fd is not None:
            os.dup2(in_fd, 0)
        if out_fd is not None:
            os.dup2(out_fd, 1)
        for fd in pipe_fds:
            try:
                os.close(fd)
            except OSError:
                pass
        out = open(1, "w", encoding="utf-8", closefd=False)
        err = open(2, "w", encoding="utf-8", closefd=False)
        try:
            exec_builtin(argv, env, out, err)
        except ShellExit as exc:
            code = exc.code
        finally:
            out.flush()
            err.flush()
    except BaseException:
        code = 1
    finally:
        os._exit(code)


def _spawn_external(argv, env: Environment, in_fd, out_fd) -> _Waiter:
    if not argv:
        return _finished(None)
    name = argv[0]
    if name.startswith("/") or name.startswith("./"):
        path = name
    else:
        path = find_command_path(name, env)
    if path is None:
        _report(f"{name}: command not found")
        return _finished(127)
    if os.access(path, os.F_OK) and not os.access(path, os.X_OK):
        _write_to(out_fd, f"{path}: Permission denied\n")
        return _finished(126)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        proc = subprocess.Popen(
            argv,
            executable=path,
            env=dict(env.items()),
            stdin=in_fd,
            stdout=out_fd,
        )
    except OSError as exc:
        _report(f"minishell: {path}: {exc.strerror or exc}")
        return _finished(126 if isinstance(exc, PermissionError) else 127)
    return lambda: _wait_process(proc)


def _start_stage(cmd: Command, env, in_fd, out_fd, last, pipe_fds) -> _Waiter:
    try:
        with apply_redirections(cmd.redirections) as (redir_in, redir_out):
            if redir_in is not None:
                in_fd = redir_in.fileno()
            if redir_out is not None:
                out_fd = redir_out.fileno()
            if is_builtin(cmd.argv):
                return _fork_builtin(cmd.argv, env, in_fd, out_fd, pipe_fds)
            return _spawn_external(cmd.argv, env, in_fd, out_fd)
    except RedirectionError as exc:
        _report(str(exc))
        return _finished(1 if last else 0)


def run_pipeline(commands: Iterable[Command], env: Environment):
    """Run the commands connected by pipes and return the resulting status.

    Builtins inside a pipeline run in a child process, so they do not change
    the shell's own state. The status of every stage that exited normally is
    recorded in order, so the last one decides.
    """
    commands = list(commands)
    pipes = [os.pipe() for _ in range(len(commands) - 1)]
    pipe_fds = [fd for pair in pipes for fd in pair]
    waiters: list[_Waiter] = []
    try:
        for i, cmd in enumerate(commands):
            in_fd = pipes[i - 1][0] if i > 0 else None
            out_fd = None
            if i < len(pipes) and not cmd.has_output_redirection():
                out_fd = pipes[i][1]
            waiters.append(
                _start_stage(
                    cmd, env, in_fd, out_fd, i == len(commands) - 1, pipe_fds
                )
            )
    finally:
        for fd in pipe_fds:
            os.close(fd)
    for wait in waiters:
        status = wait()
        if status is not None:
            status_set(status)
    return status_get()


def _redirect_only(cmd: Command):
    try:
        with apply_redirections(cmd.redirections):
            pass
    except RedirectionError as exc:
        _report(str(exc))
        status_set(1)
        return
    status_set(0)


def _run_builtin(cmd: Command, env: Environment):
    try:
        with apply_redirections(cmd.redirections) as (_, redir_out):
            if redir_out is None:
                status_set(exec_builtin(cmd.argv, env))
                return
            writer = open(
                redir_out.fileno(), "w", encoding="utf-8", closefd=False
            )
            try:
                status_set(exec_builtin(cmd.argv, env, writer))
            finally:
                writer.flush()
    except RedirectionError as exc:
        _report(str(exc))
        status_set(1)


def execute(commands: Iterable[Command], env: Environment):
    """Execute a parsed command line and return the new exit status."""
    commands = list(commands)
    if not commands:
        return status_get()
    first = commands[0]
    if not first.argv:
        _redirect_only(first)
        return status_get()
    strip_empty_args(first)
    if is_builtin(first.argv) and len(commands) == 1:
        _run_builtin(first, env)
        return status_get()
    if not first.argv or first.argv[0] == "":
        _report("Command '' not found")
        status_set(127)
        return status_get()
    return run_pipeline(commands, env)