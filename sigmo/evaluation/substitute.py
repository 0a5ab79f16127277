"""Macro substitution.

A pure tree transformation: the stored macro body is never mutated. Every
identifier leaf named in the table is replaced by a copy of its sub-form, and
every expansion leaf (name...) named in the table is replaced by the spliced
elements of its List sub-form. No renaming happens, so substituted code can
read and write the caller's bindings.
"""

from __future__ import annotations

from sigmo.errors import SigmoMacroError
from sigmo.types.value import Value, Atom
from sigmo.types.list_value import List
from sigmo.types.hash_value import Hash


def substitute(form: Value, table: dict[str, Value]) -> list[Value]:
    """Return the forms that replace `form` (more than one when splicing)."""
    match form:
        case Atom(type="identifier") if form.value in table:
            return [table[form.value].copy()]
        case Atom(type="expansion") if form.value in table:
            replacement = table[form.value]
            if not isinstance(replacement, List):
                raise SigmoMacroError(
                    f"Cannot splice '{form.value}...': substitution is of type '{replacement.type}', not 'list'"
                )
            return [child.copy() for child in replacement.children]
        case List():
            return [List(_substitute_all(form.children, table), form.quoted)]
        case Hash():
            h = form.copy()
            h.pairs = _substitute_all(form.pairs, table)
            return [h]
        case _:
            return [form.copy()]


def _substitute_all(forms: list[Value], table: dict[str, Value]) -> list[Value]:
    out: list[Value] = []
    for child in forms:
        out.extend(substitute(child, table))
    return out
