from minish.environment import Environment


def make_env():
    return Environment(["HOME=/home/user", "PATH=/usr/bin:/bin", "EMPTY=", "NOVALUE"])


def test_get_existing_values():
    env = make_env()
    assert env.get("HOME") == "/home/user"
    assert env.get("PATH") == "/usr/bin:/bin"
    assert env.get("EMPTY") == ""


def test_get_missing_and_prefix_names():
    env = make_env()
    assert env.get("HOM") is None
    assert env.get("HOMEX") is None
    assert env.get("NOVALUE") is None


def test_set_replaces_in_place():
    env = make_env()
    env.set("HOME", "/tmp")
    assert env.get("HOME") == "/tmp"
    assert env.entries()[0] == "HOME=/tmp"
    assert len(env) == 4


def test_set_appends_new_variable():
    env = make_env()
    env.set("NEW", "value")
    assert env.entries()[-1] == "NEW=value"
    assert env.get("NEW") == "value"
    assert len(env) == 5


def test_set_does_not_match_longer_name():
    env = Environment(["PATHS=x"])
    env.set("PATH", "y")
    assert env.entries() == ["PATHS=x", "PATH=y"]


def test_remove_variable():
    env = make_env()
    env.remove("PATH")
    assert env.get("PATH") is None
    assert "PATH=/usr/bin:/bin" not in env.entries()
    assert len(env) == 3


def test_remove_all_duplicates_and_missing_is_noop():
    env = Environment(["A=1", "B=2", "A=3"])
    env.remove("A")
    assert env.entries() == ["B=2"]
    env.remove("ZZZ")
    assert env.entries() == ["B=2"]


def test_remove_keeps_entry_without_equals():
    env = make_env()
    env.remove("NOVALUE")
    assert "NOVALUE" in env.entries()


def test_copy_is_independent():
    env = make_env()
    clone = env.copy()
    clone.set("HOME", "/elsewhere")
    clone.remove("PATH")
    assert env.get("HOME") == "/home/user"
    assert env.get("PATH") == "/usr/bin:/bin"
    assert clone.get("HOME") == "/elsewhere"


def test_entries_returns_copy():
    env = make_env()
    listed = env.entries()
    listed.append("X=1")
    assert env.get("X") is None
    assert len(env) == 4


def test_iteration_order_matches_entries():
    env = make_env()
    assert list(env) == env.entries()


def test_from_mapping_round_trip():
    mapping = {"USER": "alice", "SHELL": "/bin/sh", "EMPTY": ""}
    env = Environment.from_mapping(mapping)
    assert env.to_dict() == mapping
    assert env.get("USER") == "alice"


def test_to_dict_first_entry_wins_and_skips_bare_names():
    env = Environment(["A=first", "A=second", "BARE"])
    assert env.to_dict() == {"A": "first"}
    assert env.get("A") == "first"


def test_value_may_contain_equals():
    env = Environment()
    env.set("OPTS", "a=b=c")
    assert env.get("OPTS") == "a=b=c"
    assert env.to_dict() == {"OPTS": "a=b=c"}