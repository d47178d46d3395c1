"""Query tokenizer.

Turns a raw query string into a flat sequence of ``Word``/``Param`` tokens,
with ``SuperParam`` tokens carrying recursively tokenized sub-queries.

The tokenizer is a four-mode state machine driven over the query characters
plus a synthetic terminator, so the last clause always flushes:

- WORD: bare word; ``:`` turns the word into a parameter key
- PARAM: plain value, closed by whitespace
- QUOTED: ``key:"..."`` value, closed by the next ``"``
- SUBQUERY: ``key:(...)`` value, closed by the ``)`` that balances the opening one
"""

from __future__ import annotations

from enum import Enum

from hemolymph.search.query import NUMERIC_ALIASES, Param, SuperParam, Token, UnterminatedInput, Word


class _Mode(Enum):
    WORD = "word"
    PARAM = "param"
    QUOTED = "quoted"
    SUBQUERY = "subquery"


_RELATION_CHARS = frozenset("<>=")


def _starts_relation(char: str, next_char: str | None) -> bool:
    if char in _RELATION_CHARS:
        return True
    return char == "!" and next_char == "="


def _is_separator(char: str | None) -> bool:
    return char is None or char.isspace()


def tokenize(query: str, *, strict: bool = False) -> list[Token]:
    """Split a query into tokens.

    Args:
        query: Raw query text as typed by the user.
        strict: Raise ``UnterminatedInput`` instead of silently consuming to the
            end of input when a quote or sub-query is never closed.

    Returns:
        Tokens in query order. An empty query yields ``[Word("")]``.

    Examples:
        >>> tokenize('n:"lost man" ant')
        [Param(key='n', value='lost man'), Word(text='ant')]
        >>> tokenize("c>=2")
        [Param(key='c', value='>=2')]
    """
    tokens: list[Token] = []
    mode = _Mode.WORD
    key = ""
    buffer: list[str] = []
    depth = 0
    length = len(query)

    for index in range(length + 1):
        # None is the terminator
        char = query[index] if index < length else None

        if mode is _Mode.WORD:
            if _is_separator(char):
                if buffer:
                    tokens.append(Word("".join(buffer)))
                    buffer = []
            elif char == ":":
                key, buffer, mode = "".join(buffer), [], _Mode.PARAM
            elif buffer and _starts_relation(char, query[index + 1] if index + 1 < length else None):
                word = "".join(buffer)
                if word.lstrip("-") in NUMERIC_ALIASES:
                    key, buffer, mode = word, [char], _Mode.PARAM
                else:
                    buffer.append(char)
            else:
                buffer.append(char)

        elif mode is _Mode.PARAM:
            if _is_separator(char):
                tokens.append(Param(key, "".join(buffer)))
                buffer, mode = [], _Mode.WORD
            elif not buffer and char == '"':
                mode = _Mode.QUOTED
            elif not buffer and char == "(":
                depth, mode = 0, _Mode.SUBQUERY
            else:
                buffer.append(char)

        elif mode is _Mode.QUOTED:
            if char is None:
                if strict:
                    raise UnterminatedInput("quote", key)
                tokens.append(Param(key, "".join(buffer)))
            elif char == '"':
                tokens.append(Param(key, "".join(buffer)))
                buffer, mode = [], _Mode.WORD
            else:
                buffer.append(char)

        else:
            if char is None:
                if strict:
                    raise UnterminatedInput("sub-query", key)
                tokens.append(SuperParam(key, tuple(tokenize("".join(buffer)))))
            elif char == "(":
                depth += 1
                buffer.append(char)
            elif char == ")" and depth > 0:
                depth -= 1
                buffer.append(char)
            elif char == ")":
                tokens.append(SuperParam(key, tuple(tokenize("".join(buffer), strict=strict))))
                buffer, mode = [], _Mode.WORD
            else:
                buffer.append(char)

    if not tokens:
        tokens.append(Word(""))
    return tokens
