"""Argument validation shared by the special forms.

Forms validate their raw call form themselves and report problems as error
atoms; `form[0]` is always the keyword, so argument N is `form[N + 1]`.
"""

from __future__ import annotations

from typing import Optional

from sigmo.types.value import Value, Atom, error
from sigmo.types.list_value import List


def arity_error(name: str, expected: str, form: List) -> Atom:
    return error(
        f"Wrong number of arguments to '{name}': expected {expected}, got {len(form.children) - 1}"
    )


def type_error(name: str, index: int, expected: str, got: Value) -> Atom:
    return error(f"{name} expected argument {index} of type '{expected}', got type '{got.type}'")


def expect_identifier(name: str, form: List, index: int) -> Optional[Atom]:
    """Return an error unless argument `index` is an identifier atom."""
    arg = form.children[index + 1]
    if isinstance(arg, Atom) and arg.type == "identifier":
        return None
    return type_error(name, index, "identifier", arg)
