"""Special form: macro.

(macro name (params) body...)

Binds `name` to a Macro in the current context. On use, the call's raw
argument forms are substituted for the parameters throughout each body form
(no hygiene, no renaming) and each result is evaluated in the caller's
context. A trailing `rest...` parameter collects the remaining raw arguments (at
least one) and can be spliced into the body as `rest...`.
"""

from __future__ import annotations

from sigmo.types.value import Value, Atom, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.function import Macro
from sigmo.types.context import Context
from sigmo.evaluation.substitute import substitute
from sigmo.evaluation.special_forms.checks import arity_error, type_error


def _bind_raw(name: str, params: List, actual: list[Value]) -> dict[str, Value] | Atom:
    table: dict[str, Value] = {}
    for i, param in enumerate(params.children):
        if i >= len(actual):
            return error(
                f"Not enough arguments to macro '{name}'. "
                f"Expected {len(params.children)}, got {len(actual)}."
            )
        if param.type == "expansion":
            table[param.value] = List(actual[i:])
            return table
        table[param.value] = actual[i]
    return table


def macro_form(form: List, context: Context) -> Value:
    if len(form.children) < 3:
        return arity_error("macro", "at least 2", form)
    name, params = form.children[1], form.children[2]
    if not (isinstance(name, Atom) and name.type == "identifier"):
        return type_error("macro", 0, "identifier", name)
    if not isinstance(params, List):
        return type_error("macro", 1, "list", params)
    for param in params.children:
        if not (isinstance(param, Atom) and param.type in ("identifier", "expansion")):
            return error(f"Cannot use type '{param.type}' in macro argument list")

    body = form.children[3:]

    def expand(caller: Context, call: List) -> Value:
        table = _bind_raw(name.value, params, call.children[1:])
        if isinstance(table, Atom):
            return table
        last: Value = NIL
        for template in body:
            # substitute() raises SigmoMacroError on a bad splice
            for expanded in substitute(template, table):
                last = expanded.eval(caller)
                if is_error(last):
                    return last
        return last

    macro = Macro(name.value, expand)
    context.set(name.value, macro)
    return macro
