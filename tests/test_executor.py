import io
import os
import sys

from minishell.builtins import ShellState
from minishell.environment import Environment
from minishell.executor import (
    Command,
    FileMode,
    Redirection,
    execute_commands,
    find_command_path,
    read_heredoc,
    run_external,
)


def test_find_command_path(tmp_path):
    (tmp_path / "tool").write_text("")
    env = Environment([f"PATH=/nonexistent:{tmp_path}"])
    assert find_command_path(env, "tool") == f"{tmp_path}/tool"
    assert find_command_path(env, "missing") is None


def test_read_heredoc_stops_at_word():
    assert read_heredoc("EOF", ["a", "b", "EOF", "c"]) == "a\nb\n"
    assert read_heredoc(None, ["a"]) is None


def test_run_external_not_found(capsys):
    state = ShellState(Environment(["PATH=/nonexistent"]))
    assert run_external(state, ["no-such-cmd"], b"", io.BytesIO()) == 127
    assert "command not found" in capsys.readouterr().err


def test_run_external_output():
    out = io.BytesIO()
    code = run_external(
        ShellState(Environment()),
        [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"],
        b"data",
        out,
    )
    assert code == 0
    assert out.getvalue() == b"data"


def test_builtin_echo_output():
    out = io.StringIO()
    state = ShellState(Environment())
    assert execute_commands(state, [Command(["echo", "hi"])], io.StringIO(), out) == 0
    assert out.getvalue() == "hi\n"


def test_pipeline_feeds_next_stage():
    out = io.StringIO()
    upper = [sys.executable, "-c", "import sys; print(sys.stdin.read().upper(), end='')"]
    execute_commands(
        ShellState(Environment()),
        [Command(["echo", "hi"]), Command(upper)],
        io.StringIO(),
        out,
    )
    assert out.getvalue() == "HI\n"


def test_export_alone_changes_state():
    state = ShellState(Environment())
    execute_commands(state, [Command(["export", "X=1"])], io.StringIO(), io.StringIO())
    assert state.env.get("X") == "1"


def test_export_in_pipeline_does_not_change_state():
    state = ShellState(Environment())
    execute_commands(
        state,
        [Command(["export", "X=1"]), Command(["echo"])],
        io.StringIO(),
        io.StringIO(),
    )
    assert state.env.get("X") is None


def test_output_redirection_and_append(tmp_path):
    target = str(tmp_path / "out.txt")
    state = ShellState(Environment())
    for word, mode in (("a", FileMode.WRITE_TRUNCATE), ("b", FileMode.WRITE_APPEND)):
        execute_commands(
            state,
            [Command(["echo", word], [Redirection(target, mode)])],
            io.StringIO(),
            io.StringIO(),
        )
    with open(target) as handle:
        assert handle.read() == "a\nb\n"


def test_input_redirection(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("content")
    out = io.StringIO()
    cat = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"]
    execute_commands(
        ShellState(Environment()),
        [Command(cat, [Redirection(str(source), FileMode.READ)])],
        io.StringIO(),
        out,
    )
    assert out.getvalue() == "content"


def test_missing_input_file_status(tmp_path, capsys):
    state = ShellState(Environment())
    missing = str(tmp_path / "missing")
    status = execute_commands(
        state,
        [Command(["echo"], [Redirection(missing, FileMode.READ)])],
        io.StringIO(),
        io.StringIO(),
    )
    assert status == 1
    assert state.exit_status == 1
    assert missing in capsys.readouterr().err


def test_heredoc_feeds_command():
    out = io.StringIO()
    cat = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"]
    execute_commands(
        ShellState(Environment()),
        [Command(cat, heredoc="END")],
        io.StringIO("one\ntwo\nEND\nthree\n"),
        out,
    )
    assert out.getvalue() == "one\ntwo\n"


def test_exit_status_of_failing_command():
    state = ShellState(Environment())
    fail = [sys.executable, "-c", "raise SystemExit(3)"]
    assert execute_commands(state, [Command(fail)], io.StringIO(), io.StringIO()) == 3
    assert state.exit_status == 3
    assert os.path.exists(sys.executable)