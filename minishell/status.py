"""Last exit status of the shell, shared across the whole session."""

_last_status = 0


def status_get():
    """Return the exit status of the last command."""
    return _last_status


def status_set(value):
    """Record ``value`` as the exit status of the last command."""
    global _last_status
    _last_status = int(value)