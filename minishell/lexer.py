"""Splitting of a command line into tokens, with variable expansion."""

import dataclasses
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from minishell.environment import Environment


class TokenCategory(IntEnum):
    """Kinds of token; redirection values match the file modes they open."""

    SPACE = 1
    DOUBLE_QUOTE = 2
    PIPE = 3
    ARGUMENT = 4
    REDIR_OUT = 5
    REDIR_APPEND = 6
    REDIR_IN = 7
    HEREDOC = 8


@dataclass(frozen=True)
class Token:
    """A lexed token; ``length`` is the number of characters it stands for."""

    value: str
    category: TokenCategory
    length: int


class UnclosedQuoteError(ValueError):
    """A quote was opened and never closed."""

    def __init__(self) -> None:
        super().__init__("unclosed quotes")


_WORD_REST = re.compile(r"[^\"' <>|$\t]*")
_VARIABLE_NAME = re.compile(r"[^ |'\"<>$]*")
_REDIRECTIONS = {
    ">": TokenCategory.REDIR_OUT,
    ">>": TokenCategory.REDIR_APPEND,
    "<": TokenCategory.REDIR_IN,
    "<<": TokenCategory.HEREDOC,
}


def _expand_dollar(
    text: str, index: int, env: Environment | None, exit_status: int
) -> tuple[str, int]:
    """Expand the '$' at ``index``; return the value and the next index."""
    following = text[index + 1:index + 2]
    if following == "?":
        return str(exit_status), index + 2
    if following in ("", " "):
        return "$", index + 1
    end = _VARIABLE_NAME.match(text, index + 1).end()
    value = env.get(text[index + 1:end]) if env is not None else None
    return (value if value is not None else ""), end


def _scan(text: str, env: Environment | None, exit_status: int) -> Iterator[Token]:
    index = 0
    while index < len(text):
        ch = text[index]
        if ch in " \t":
            yield Token(" ", TokenCategory.SPACE, 1)
            index += 1
        elif ch == "|":
            yield Token("|", TokenCategory.PIPE, 1)
            index += 1
        elif ch == "$":
            value, index = _expand_dollar(text, index, env, exit_status)
            yield Token(value, TokenCategory.ARGUMENT, len(value))
        elif ch in "'\"":
            end = text.find(ch, index + 1)
            if end == -1:
                raise UnclosedQuoteError()
            category = (
                TokenCategory.ARGUMENT if ch == "'" else TokenCategory.DOUBLE_QUOTE
            )
            yield Token(text[index + 1:end], category, end - index + 1)
            index = end + 1
        elif ch in "<>":
            operator = ch * 2 if text.startswith(ch * 2, index) else ch
            yield Token(operator, _REDIRECTIONS[operator], len(operator))
            index += len(operator)
        else:
            end = _WORD_REST.match(text, index + 1).end()
            yield Token(text[index:end], TokenCategory.ARGUMENT, end - index)
            index = end


def tokenize(
    text: str, env: Environment | None = None, exit_status: int = 0
) -> list[Token]:
    """Split a command line into tokens.

    Unquoted ``$NAME`` and ``$?`` are expanded; double-quoted text is kept
    as a DOUBLE_QUOTE token for ``expand_double_quotes``.  Raises
    UnclosedQuoteError for an unterminated quote.
    """
    return list(_scan(text, env, exit_status))


def _expand_in_quotes(value: str, env: Environment | None, exit_status: int) -> str:
    parts = []
    start = 0
    while (dollar := value.find("$", start)) != -1:
        parts.append(value[start:dollar])
        expanded, start = _expand_dollar(value, dollar, env, exit_status)
        parts.append(expanded)
    parts.append(value[start:])
    return "".join(parts)


def expand_double_quotes(
    tokens: Iterable[Token], env: Environment | None = None, exit_status: int = 0
) -> list[Token]:
    """Expand variables inside double-quoted tokens and make them arguments."""
    result = []
    for token in tokens:
        if token.category == TokenCategory.DOUBLE_QUOTE:
            value = _expand_in_quotes(token.value, env, exit_status)
            token = dataclasses.replace(
                token, value=value, category=TokenCategory.ARGUMENT, length=len(value)
            )
        result.append(token)
    return result


def delete_spaces(tokens: Iterable[Token]) -> list[Token]:
    """Drop every token whose value is a single space."""
    return [token for token in tokens if token.value != " "]