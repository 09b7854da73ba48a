# minishell

The parts of a small command shell, as a Python library. It splits a
command line into tokens, expands `$NAME` and `$?`, honours single and
double quotes, provides the builtins `echo`, `cd`, `pwd`, `env`, `export`,
`unset` and `exit`, and runs pipelines of commands with `<`, `>`, `>>` and
here-document redirections. Commands that are not builtins are found
directly or through `PATH` and started as external programs.

## Modules

| Module | What it holds |
| --- | --- |
| `minishell.numbers` | `atoi` and `parse_integer` |
| `minishell.linereader` | `LineReader`, which reads a file descriptor line by line |
| `minishell.environment` | `Environment`, the ordered list of `NAME=value` entries, and `entry_name` |
| `minishell.lexer` | `tokenize`, `expand_double_quotes`, `delete_spaces`, `Token`, `TokenCategory`, `UnclosedQuoteError` |
| `minishell.builtins` | `ShellState`, `ShellExit`, `display_error`, `is_builtin`, the builtins `echo`, `pwd`, `print_env`, `change_directory`, `export`, `unset`, `exit_builtin`, and the dispatchers `run_builtin` and `run_special` |
| `minishell.executor` | `Command`, `Redirection`, `FileMode`, `find_command_path`, `read_heredoc`, `run_external`, `execute_commands` |

## The environment

```python
from minishell.environment import Environment, entry_name

env = Environment(["HOME=/home/user", "PATH=/usr/bin:/bin"])
env.get("HOME")          # "/home/user"
env.get("MISSING")       # None
env.set("EDITOR=vi")     # replaces an existing EDITOR entry, or appends one
entry_name("EDITOR=vi")  # "EDITOR"
```

`unset(prefix)` removes every entry that starts with the prefix.
`sorted_declarations()` returns the lines that `export` prints when given
no arguments, in the form `declare -x NAME="value"`.

## Tokenizing a command line

```python
from minishell.environment import Environment
from minishell.lexer import tokenize, expand_double_quotes, delete_spaces

env = Environment(["USER=alice"])
tokens = tokenize('echo "hi $USER" | wc -c', env, 0)
tokens = expand_double_quotes(tokens, env, 0)
tokens = delete_spaces(tokens)
```

`tokenize` expands unquoted `$NAME` and `$?` right away and keeps
double-quoted text as `DOUBLE_QUOTE` tokens; `expand_double_quotes` then
expands the variables inside them and turns them into `ARGUMENT` tokens.
Single-quoted text is never expanded. An unclosed quote raises
`UnclosedQuoteError`. The redirection operators become `REDIR_OUT` (`>`),
`REDIR_APPEND` (`>>`), `REDIR_IN` (`<`) and `HEREDOC` (`<<`) tokens.

## Builtins

Each builtin takes a `ShellState` (an `Environment` and the last exit
status) where it needs one, and writes to the text stream it is given.
`exit_builtin` ends a session by raising `ShellExit` carrying the exit
code; with two arguments it reports "too many arguments" and returns
instead. `run_builtin` dispatches on `args[0]` and returns `None` for a
name that is not a builtin; `run_special` does the same for the builtins
that change the shell itself (`cd`, `export`, `exit`, `unset`).

## Running a pipeline

```python
import io

from minishell.builtins import ShellState
from minishell.environment import Environment
from minishell.executor import Command, FileMode, Redirection, execute_commands

state = ShellState(Environment(["PATH=/usr/bin:/bin"]))
out = io.StringIO()
status = execute_commands(
    state,
    [Command(["echo", "hello"]), Command(["tr", "a-z", "A-Z"])],
    stdout=out,
)
# out.getvalue() == "HELLO\n", status == 0

execute_commands(
    state,
    [Command(["echo", "saved"], files=[Redirection("out.txt", FileMode.WRITE_TRUNCATE)])],
)
```

A lone command without redirections that changes the shell runs against
`state` itself; every other builtin runs on a copy of the state, as a
pipeline stage would. Each stage's output is collected and passed on to
the next stage, written to its last output file, or, for the final stage,
written to `stdout`. A `Command` with a `heredoc` stop word reads lines
from `stdin` up to that word and feeds them to the command. The return
value is the status of the last stage; an unknown command gives 127.

## Numbers

```python
from minishell.numbers import atoi, parse_integer

atoi("  42abc")        # 42
parse_integer(" -17")  # -17
```

`atoi` follows C `atoi`: it stops at the first non-digit. `parse_integer`
raises `ValueError` when no digit follows the optional sign, when the
value is outside the 32-bit signed range, or when the digits are followed
by a character other than whitespace.

## Reading lines

`LineReader(fd, buffer_size)` reads from a file descriptor with `os.read`
and returns one line at a time, newline included, from `next_line()`; it
returns `None` at end of input and can also be iterated.

## What this package does not do

There is no interactive prompt, no read loop and no `minishell` command to
run: the package offers the lexer, builtins and executor, but nothing
that reads lines from a terminal and drives them. There is also no step
that turns a list of tokens into `Command` objects; callers build
`Command` values themselves. Signal handling (Ctrl-C, Ctrl-\) and line
history are not provided.

## Running the tests

Install the `test` extra and run `pytest`.