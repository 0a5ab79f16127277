"""
  Sigmo lexer

- Single pass state machine over three modes: normal, line comment, string
- Emits raw token strings; classification happens in the parser
- '(' ')' '{' '}' are single-character tokens, "'(" opens a quoted list
- '[' and ']' are ignored outside strings
- Inside strings \\n \\t \\r become control characters; everything else,
  including other backslashes, is kept literally
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator


class ReadMode(Enum):
    NORMAL = 0
    COMMENT = 1
    STRING = 2


WHITESPACE = frozenset(" \t\n\r")
IGNORED = frozenset("[]")
ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def lex(source: str) -> Iterator[str]:
    """Token generator: yields token strings in source order."""
    tok: list[str] = []
    mode = ReadMode.NORMAL

    def flush() -> Iterator[str]:
        if tok:
            yield "".join(tok)
            tok.clear()

    for c in source:
        if mode is ReadMode.COMMENT:
            if c == "\n":
                mode = ReadMode.NORMAL
            continue

        if mode is ReadMode.STRING:
            # tok always holds at least the opening quote here
            if c == '"' and tok[-1] != "\\":
                tok.append(c)
                yield from flush()
                mode = ReadMode.NORMAL
            elif tok[-1] == "\\" and c in ESCAPES:
                tok[-1] = ESCAPES[c]
            else:
                tok.append(c)
            continue

        if c in WHITESPACE:
            yield from flush()
        elif c == ";":
            yield from flush()
            mode = ReadMode.COMMENT
        elif c == '"':
            tok.append(c)
            mode = ReadMode.STRING
        elif c == "(":
            if tok == ["'"]:
                tok.clear()
                yield "'("
            else:
                yield from flush()
                yield "("
        elif c in "){}":
            yield from flush()
            yield c
        elif c in IGNORED:
            continue
        else:
            tok.append(c)

    yield from flush()


def tokenize(source: str) -> list[str]:
    return list(lex(source))
