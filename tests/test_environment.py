from minishell.environment import Environment, parse_env_line


def test_parse_env_line_splits_at_first_equals():
    assert parse_env_line("A=b=c") == ("A", "b=c")


def test_parse_env_line_empty_value():
    assert parse_env_line("EMPTY=") == ("EMPTY", "")


def test_parse_env_line_without_equals():
    assert parse_env_line("NOEQ") is None


def test_from_envp_skips_invalid_and_keeps_order():
    env = Environment.from_envp(["HOME=/home/u", "BAD", "PATH=/bin:/usr/bin"])
    assert env.items() == [("HOME", "/home/u"), ("PATH", "/bin:/usr/bin")]
    assert "BAD" not in env


def test_get_missing_is_none():
    env = Environment.from_envp(["A=1"])
    assert env.get("A") == "1"
    assert env.get("B") is None


def test_set_existing_keeps_position():
    env = Environment.from_envp(["A=1", "B=2"])
    env.set("A", "3")
    assert env.items() == [("A", "3"), ("B", "2")]


def test_set_new_appends():
    env = Environment.from_envp(["A=1"])
    env.set("Z", "9")
    assert list(env) == ["A", "Z"]


def test_unset_removes_and_ignores_missing():
    env = Environment.from_envp(["A=1", "B=2"])
    env.unset("A")
    env.unset("NOPE")
    assert env.items() == [("B", "2")]
    assert len(env) == 1


def test_unset_first_variable_keeps_rest():
    env = Environment.from_envp(["A=1", "B=2", "C=3"])
    env.unset("A")
    assert list(env) == ["B", "C"]


def test_to_envp_round_trip():
    lines = ["A=1", "B=x=y", "C="]
    env = Environment.from_envp(lines)
    assert env.to_envp() == lines
    assert Environment.from_envp(env.to_envp()).items() == env.items()