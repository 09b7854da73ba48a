"""Running parsed commands: pipelines, redirections and here-documents."""

import io
import os
import subprocess
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, TextIO

from minishell.builtins import (
    ShellExit,
    ShellState,
    display_error,
    is_builtin,
    run_builtin,
    run_special,
)
from minishell.environment import Environment


class FileMode(IntEnum):
    """How a redirected file is opened."""

    WRITE_TRUNCATE = 5
    WRITE_APPEND = 6
    READ = 7


@dataclass(frozen=True)
class Redirection:
    """A file named on the command line with its open mode."""

    filename: str
    mode: FileMode


@dataclass
class Command:
    """One stage of a pipeline."""

    args: list[str] = field(default_factory=list)
    files: list[Redirection] = field(default_factory=list)
    heredoc: str | None = None


def find_command_path(env: Environment, command: str) -> str | None:
    """Search the PATH entries for an existing ``dir/command``."""
    for entry in env:
        if not entry.startswith("PATH="):
            continue
        for directory in filter(None, entry[5:].split(":")):
            candidate = f"{directory}/{command}"
            if os.path.exists(candidate):
                return candidate
    return None


def read_heredoc(stop_word: str | None, lines: Iterable[str]) -> str | None:
    """Collect lines up to ``stop_word`` (or the end), each with a newline."""
    if stop_word is None:
        return None
    collected = []
    for line in lines:
        if line == stop_word:
            break
        collected.append(line + "\n")
    return "".join(collected)


def _status(code: int) -> int:
    if code < 0:
        return -code
    return (code & 0xFF) % 255


def _env_dict(env: Environment) -> dict[str, str]:
    return {
        name: value
        for name, sep, value in (entry.partition("=") for entry in env)
        if sep
    }


def run_external(
    state: ShellState,
    args: list[str],
    stdin: bytes | TextIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    """Run a program found directly or through PATH; return its status."""
    if os.path.exists(args[0]):
        path = args[0]
    else:
        path = find_command_path(state.env, args[0])
    if path is None:
        display_error(None, args[0], "command not found")
        return 127
    stdout = stdout if stdout is not None else sys.stdout.buffer
    options: dict = {}
    if isinstance(stdin, bytes):
        options["input"] = stdin
    elif stdin is not None:
        try:
            options["stdin"] = stdin.fileno()
        except (AttributeError, OSError, io.UnsupportedOperation):
            options["input"] = stdin.read().encode()
    try:
        result = subprocess.run(
            args,
            executable=path,
            env=_env_dict(state.env),
            stdout=subprocess.PIPE,
            **options,
        )
    except OSError as error:
        display_error(None, args[0], error.strerror or str(error))
        return 127
    stdout.write(result.stdout)
    return _status(result.returncode)


def _lines(stream: TextIO) -> Iterator[str]:
    while line := stream.readline():
        yield line.rstrip("\n")


def _apply_redirections(
    files: list[Redirection], data: bytes | None
) -> tuple[bytes | None, str | None]:
    target = None
    for redirection in files:
        if redirection.mode == FileMode.READ:
            with open(redirection.filename, "rb") as handle:
                data = handle.read()
            continue
        if redirection.mode == FileMode.WRITE_TRUNCATE:
            flags, perms = os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o700
        else:
            flags, perms = os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644
        os.close(os.open(redirection.filename, flags, perms))
        target = redirection.filename
    return data, target


def _run_stage(
    state: ShellState, args: list[str], data: bytes | None, stdin: TextIO
) -> tuple[bytes, int]:
    if not args:
        return b"", 0
    if is_builtin(args[0]):
        child = ShellState(Environment(state.env.as_list()), state.exit_status)
        out = io.StringIO()
        try:
            code = run_builtin(child, args, out) or 0
        except ShellExit as ended:
            code = ended.code
        return out.getvalue().encode(), _status(code)
    out_bytes = io.BytesIO()
    code = run_external(state, args, data if data is not None else stdin, out_bytes)
    return out_bytes.getvalue(), code


def execute_commands(
    state: ShellState,
    commands: Iterable[Command],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run a pipeline and return the status of its last stage.

    A lone command without redirections that changes the shell (cd,
    export, exit, unset) runs in the shell's own state; every other
    stage runs on a copy.
    """
    commands = list(commands)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    state.exit_status = 0
    if len(commands) == 1 and not commands[0].files and commands[0].args:
        if run_special(state, commands[0].args, stdout) == 0:
            return state.exit_status
    piped: bytes | None = None
    status = 0
    for position, command in enumerate(commands):
        last = position == len(commands) - 1
        data = piped if position > 0 else None
        if command.heredoc is not None:
            data = (read_heredoc(command.heredoc, _lines(stdin)) or "").encode()
        try:
            data, target = _apply_redirections(command.files, data)
        except OSError as error:
            display_error(None, error.filename, error.strerror or str(error))
            status, piped = 1, b""
            continue
        output, status = _run_stage(state, command.args, data, stdin)
        if target is not None:
            with open(target, "ab") as handle:
                handle.write(output)
            piped = b""
        elif last:
            stdout.write(output.decode("utf-8", errors="replace"))
        else:
            piped = output
    state.exit_status = status
    return status