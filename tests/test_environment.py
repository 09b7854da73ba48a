from minishell.environment import Environment, entry_name


def test_entry_name():
    assert entry_name("PATH=/bin") == "PATH"
    assert entry_name("NOVALUE") == "NOVALUE"
    assert entry_name("A=b=c") == "A"


def test_get_returns_value_after_first_equals():
    env = Environment(["A=b=c", "HOME=/home/user"])
    assert env.get("A") == "b=c"
    assert env.get("HOME") == "/home/user"


def test_get_missing_is_none():
    env = Environment(["A=1"])
    assert env.get("B") is None
    assert Environment().get("A") is None


def test_get_entry_without_equals_is_empty():
    env = Environment(["FLAG"])
    assert env.get("FLAG") == ""


def test_get_requires_exact_name():
    env = Environment(["PATHEXT=x"])
    assert env.get("PATH") is None


def test_add_appends():
    env = Environment(["A=1"])
    env.add("B=2")
    assert env.as_list() == ["A=1", "B=2"]
    assert len(env) == 2


def test_update_replaces_first_prefix_match():
    env = Environment(["PATHEXT=x", "PATH=/bin"])
    env.update("PATH=/usr")
    assert env.as_list() == ["PATH=/usr", "PATH=/bin"]


def test_update_without_match_changes_nothing():
    env = Environment(["A=1"])
    env.update("B=2")
    assert env.as_list() == ["A=1"]


def test_set_adds_or_replaces():
    env = Environment(["A=1"])
    env.set("B=2")
    env.set("A=3")
    assert env.as_list() == ["A=3", "B=2"]
    assert env.get("A") == "3"


def test_unset_removes_every_prefixed_entry():
    env = Environment(["HOME=/h", "USER=u", "HOMEDIR=/d"])
    env.unset("HOME")
    assert env.as_list() == ["USER=u"]


def test_unset_unknown_keeps_entries():
    env = Environment(["A=1", "B=2"])
    env.unset("C")
    assert env.as_list() == ["A=1", "B=2"]


def test_sorted_declarations():
    env = Environment(["B=2", "A=1", "C"])
    assert env.sorted_declarations() == [
        'declare -x A="1"',
        'declare -x B="2"',
        'declare -x C=""',
    ]
    assert env.as_list() == ["B=2", "A=1", "C"]


def test_iteration_and_copy():
    entries = ["X=1", "Y=2"]
    env = Environment(entries)
    assert list(env) == entries
    copy = env.as_list()
    copy.append("Z=3")
    assert env.as_list() == entries