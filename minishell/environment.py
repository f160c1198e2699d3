"""Ordered shell environment variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def parse_env_line(line):
    """Split ``NAME=value`` into a pair; return None if there is no ``=``."""
    name, sep, value = line.partition("=")
    if not sep:
        return None
    return name, value


class Environment:
    """Variables kept in the order they were first defined."""

    def __init__(self, variables=None):
        self._vars: dict[str, str] = dict(variables or {})

    @classmethod
    def from_envp(cls, envp: Iterable[str]):
        """Build from ``NAME=value`` strings, skipping entries without ``=``."""
        env = cls()
        for line in envp:
            pair = parse_env_line(line)
            if pair is not None:
                env.set(*pair)
        return env

    def get(self, name):
        """Return the value of ``name`` or None if it is not set."""
        return self._vars.get(name)

    def set(self, name, value):
        """Define or replace ``name``; a replaced variable keeps its place."""
        self._vars[name] = value

    def unset(self, name):
        """Remove ``name`` if it is defined."""
        self._vars.pop(name, None)

    def items(self):
        """Return the (name, value) pairs in definition order."""
        return list(self._vars.items())

    def to_envp(self):
        """Return the variables as ``NAME=value`` strings."""
        return [f"{name}={value}" for name, value in self._vars.items()]

    def __contains__(self, name):
        return name in self._vars

    def __len__(self):
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)