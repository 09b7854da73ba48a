"""The shell's builtin commands."""

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

from minishell.environment import Environment
from minishell.numbers import atoi

_BUILTINS = frozenset({"echo", "cd", "env", "exit", "export", "pwd", "unset"})


@dataclass
class ShellState:
    """State shared by the commands of one shell session."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``code``."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit {code}")
        self.code = code


def display_error(
    command: str | None, argument: str, message: str, stream: TextIO | None = None
) -> None:
    """Write ``minishell: [command: ]argument: message`` to ``stream``."""
    stream = stream if stream is not None else sys.stderr
    prefix = f"{command}: " if command else ""
    stream.write(f"minishell: {prefix}{argument}: {message}\n")


def is_builtin(name: str) -> bool:
    """Tell whether ``name`` is one of the builtin commands."""
    return name in _BUILTINS


def echo(args: list[str], out: TextIO) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    newline = not (len(args) > 1 and args[1] == "-n")
    words = args[1:] if newline else args[2:]
    out.write(" ".join(words) + ("\n" if newline else ""))
    return 0


def pwd(out: TextIO) -> int:
    """Print the current working directory."""
    try:
        out.write(os.getcwd() + "\n")
    except OSError:
        pass
    return 0


def print_env(state: ShellState, out: TextIO) -> int:
    """Print every environment entry on its own line."""
    for entry in state.env:
        out.write(entry + "\n")
    return 0


def _chdir_quietly(path: str | None) -> None:
    if path is None:
        return
    try:
        os.chdir(path)
    except OSError:
        pass


def change_directory(state: ShellState, args: list[str], out: TextIO) -> int:
    """Change directory and keep PWD and OLDPWD up to date."""
    target = args[1] if len(args) > 1 else None
    if target is None or target in ("~", "--"):
        _chdir_quietly(state.env.get("HOME"))
    elif target == "-":
        previous = state.env.get("OLDPWD")
        if previous is None:
            out.write("cd: OLDPWD not set\n")
        else:
            _chdir_quietly(previous)
    else:
        try:
            os.chdir(target)
        except OSError:
            display_error("cd", target, "No such file or directory")
            state.exit_status = 1
    previous_dir = state.env.get("PWD") or ""
    try:
        current_dir = os.getcwd()
    except OSError:
        current_dir = ""
    for name, value in (("OLDPWD", previous_dir), ("PWD", current_dir)):
        entry = f"{name}={value}"
        if state.env.get(name) is None:
            state.env.add(entry)
        else:
            state.env.update(entry)
    return 0


def _valid_identifier(arg: str) -> bool:
    name = arg.partition("=")[0]
    if not arg or not (arg[0] == "_" or (arg[0].isascii() and arg[0].isalpha())):
        return False
    return all(ch == "_" or (ch.isascii() and ch.isalnum()) for ch in name[1:])


def export(state: ShellState, args: list[str], out: TextIO) -> int:
    """Set variables, or list them sorted when no argument is given."""
    if len(args) < 2:
        for line in state.env.sorted_declarations():
            out.write(line + "\n")
        return 0
    for arg in args[1:]:
        if not _valid_identifier(arg):
            display_error("export", arg, "not a valid identifier")
            state.exit_status = 1
            continue
        state.env.set(arg)
    return 0


def unset(state: ShellState, args: list[str]) -> int:
    """Remove every entry starting with each argument."""
    for arg in args[1:]:
        state.env.unset(arg)
    return 0


def _is_numeric(text: str) -> bool:
    if text[:1] in ("-", "+"):
        text = text[1:]
    return all("0" <= ch <= "9" for ch in text)


def exit_builtin(state: ShellState, args: list[str]) -> int:
    """End the shell by raising ShellExit, or refuse with two arguments."""
    if len(args) == 3:
        sys.stderr.write("exit: too many arguments\n")
        state.exit_status = 1
        return 0
    if len(args) > 1 and not _is_numeric(args[1]):
        sys.stderr.write(f"exit: {args[1]}: numeric argument required\n")
        raise ShellExit(255)
    if len(args) == 1:
        raise ShellExit(state.exit_status)
    raise ShellExit(atoi(args[1]))


def run_builtin(state: ShellState, args: list[str], out: TextIO) -> int | None:
    """Run any builtin; return its status, or None if ``args[0]`` is none."""
    name = args[0]
    if name == "echo":
        return echo(args, out)
    if name == "cd":
        return change_directory(state, args, out)
    if name == "env":
        return print_env(state, out)
    if name == "exit":
        return exit_builtin(state, args)
    if name == "export":
        return export(state, args, out)
    if name == "pwd":
        return pwd(out)
    if name == "unset":
        return unset(state, args)
    return None


def run_special(state: ShellState, args: list[str], out: TextIO) -> int | None:
    """Run a builtin that changes the shell itself; None for any other."""
    name = args[0]
    if name == "cd":
        return change_directory(state, args, out)
    if name == "export":
        return export(state, args, out)
    if name == "exit":
        return exit_builtin(state, args)
    if name == "unset":
        return unset(state, args)
    return None