import pytest

from minishell.status import status_get, status_set


@pytest.fixture(autouse=True)
def reset_status():
    status_set(0)
    yield
    status_set(0)


def test_initial_status_after_reset_is_zero():
    assert status_get() == 0


def test_set_then_get_round_trip():
    status_set(127)
    assert status_get() == 127


def test_last_set_wins():
    status_set(2)
    status_set(1)
    assert status_get() == 1


@pytest.mark.parametrize("value", [0, 1, 2, 126, 127, 255])
def test_round_trip_many_values(value):
    status_set(value)
    assert status_get() == value