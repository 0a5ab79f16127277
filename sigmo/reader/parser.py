"""
  Sigmo parser

Builds Values from the token stream using an explicit stack of open
containers (lists, quoted lists and hash literals). Atom tokens are
classified by `categorize`:

    name...          -> expansion   (name must be an identifier)
    #Type            -> type
    name#Type        -> typed-id    (whole token kept, split when binding)
    true false nil   -> bool / nil
    42  -7           -> int
    3.14  1e3        -> float
    "text"           -> string
    foo  set!  +     -> identifier  (may contain '/' namespace separators)
    :key             -> symbol
"""

from __future__ import annotations

import re
from typing import Iterable

from sigmo import LispValue
from sigmo.errors import SigmoSyntaxError
from sigmo.reader.lexer import tokenize
from sigmo.types.value import Atom, TRUE, FALSE, NIL
from sigmo.types.list_value import List
from sigmo.types.hash_value import Hash


IDENTIFIER_RE = re.compile(r"[\w$!+\-=<>*/](?:(?:/|-)[\d\w]|[\d\w_$])*[?!*]?(?:\.\.\.)?", re.ASCII)
SYMBOL_RE = re.compile(r":\w(?:-[\d\w]|[\d\w_$])*", re.ASCII)
INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?", re.ASCII)

LITERALS: dict[str, Atom] = {
    "true": TRUE,
    "false": FALSE,
    "nil": NIL,
}


def is_identifier(token: str) -> bool:
    return IDENTIFIER_RE.fullmatch(token) is not None


def is_symbol(token: str) -> bool:
    return SYMBOL_RE.fullmatch(token) is not None


def _invalid(token: str) -> SigmoSyntaxError:
    return SigmoSyntaxError(f"Invalid token '{token}'")


def categorize(token: str) -> Atom:
    """Classify a single non-bracket token, raising SigmoSyntaxError if invalid."""
    if token.endswith("..."):
        name = token[:-3]
        if is_identifier(name):
            return Atom("expansion", name)
        raise _invalid(token)

    if token.startswith("#"):
        if is_identifier(token[1:]):
            return Atom("type", token[1:])
        raise _invalid(token)

    if "#" in token:
        name, _, type_name = token.partition("#")
        if is_identifier(name) and is_identifier(type_name):
            return Atom("typed-id", token)
        raise _invalid(token)

    if token in LITERALS:
        return LITERALS[token]
    if INT_RE.fullmatch(token):
        return Atom("int", int(token))
    if FLOAT_RE.fullmatch(token):
        return Atom("float", float(token))
    # quoted text holding "#" or ending in "..." was rejected above
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return Atom("string", token[1:-1])
    if is_identifier(token):
        return Atom("identifier", token)
    if is_symbol(token):
        return Atom("symbol", token)
    raise _invalid(token)


def parse(tokens: Iterable[str]) -> list[LispValue]:
    """Parse tokens into top-level values.

    A bare atom read while no container is open is returned on its own,
    which lets a single atom be read without wrapping parens.
    """
    output: list[LispValue] = []
    stack: list[List | Hash] = []

    def close(container: List | Hash) -> None:
        if stack:
            stack[-1].append(container)
        else:
            output.append(container)

    for token in tokens:
        if token == "'(":
            stack.append(List(quoted=True))
        elif token == "(":
            stack.append(List())
        elif token == ")":
            if not stack or not isinstance(stack[-1], List):
                raise SigmoSyntaxError("Unexpected token ')' (no matching open paren).")
            close(stack.pop())
        elif token == "{":
            stack.append(Hash())
        elif token == "}":
            if not stack or not isinstance(stack[-1], Hash):
                raise SigmoSyntaxError("Unexpected token '}' (no matching open bracket).")
            close(stack.pop())
        else:
            atom = categorize(token)
            if not stack:
                return [atom]
            stack[-1].append(atom)

    if stack:
        opener = "{" if isinstance(stack[-1], Hash) else "("
        raise SigmoSyntaxError(f"Unexpected end of input ({len(stack)} unclosed '{opener}').")
    return output


def read(source: str) -> list[LispValue]:
    """Tokenize and parse source text."""
    return parse(tokenize(source))
