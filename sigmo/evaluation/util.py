"""Truthiness, equality, numeric helpers and sequential body evaluation.

Shared by the evaluator, the special forms and the built-in library.
"""

from __future__ import annotations

from sigmo.types.value import Value, Atom, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.hash_value import Hash
from sigmo.types.function import Function, Macro
from sigmo.types.context import Context


def evaluate_body(forms: list[Value], context: Context) -> Value:
    """Evaluate forms in order; return the last value, the first error, or nil."""
    last: Value = NIL
    for form in forms:
        last = form.eval(context)
        if is_error(last):
            return last
    return last


def truthy(value: Value) -> bool:
    match value:
        case List():
            return len(value.children) > 0
        case Hash():
            return bool(value.vals) or bool(value.sym_vals)
        case Function() | Macro():
            return True
        case Atom(type="string"):
            return len(value.value) > 0
        case Atom(type="int") | Atom(type="float"):
            return value.value != 0
        case Atom(type="bool"):
            return value.value is True
        case _:
            return False


def compare(a: Value, b: Value) -> bool:
    """Equal iff same type tag and equal payload (structural for containers)."""
    if a.type != b.type:
        return False
    match a:
        case Atom(type="nil"):
            return True
        case Atom():
            return a.value == b.value
        case List():
            return len(a.children) == len(b.children) and all(
                compare(x, y) for x, y in zip(a.children, b.children)
            )
        case Hash():
            return _same_keys(a.vals, b.vals) and _same_keys(a.sym_vals, b.sym_vals)
        case _:
            return a is b


def _same_keys(x: dict[str, Value], y: dict[str, Value]) -> bool:
    return x.keys() == y.keys() and all(compare(x[k], y[k]) for k in x)


# -------------------------------
# Numbers
# -------------------------------
def is_number(value: Value) -> bool:
    return isinstance(value, Atom) and value.type in ("int", "float")


def as_float(value: Atom) -> float:
    return float(value.value)


def _numeric(a: Atom, b: Atom, result: float | int) -> Atom:
    # int iff both operands are ints
    if a.type == "int" and b.type == "int":
        return Atom("int", int(result))
    return Atom("float", float(result))


def add(a: Atom, b: Atom) -> Atom:
    if not (is_number(a) and is_number(b)):
        return error("Non-numeric value being added")
    return _numeric(a, b, a.value + b.value)


def negate(a: Atom) -> Atom:
    if not is_number(a):
        return error("Non-numeric value cannot be negated")
    return Atom(a.type, -a.value)


def multiply(a: Atom, b: Atom) -> Atom:
    if not (is_number(a) and is_number(b)):
        return error("Non-numeric value being multiplied")
    return _numeric(a, b, a.value * b.value)


def divide(a: Atom, b: Atom) -> Atom:
    if not (is_number(a) and is_number(b)):
        return error("Non-numeric value being divided")
    if b.value == 0:
        return error("Division by zero")
    if a.type == "int" and b.type == "int":
        # truncate toward zero
        q = abs(a.value) // abs(b.value)
        return Atom("int", q if (a.value < 0) == (b.value < 0) else -q)
    return Atom("float", as_float(a) / as_float(b))


def compare_num(a: Atom, b: Atom) -> int:
    """Order two numbers after promoting both to float: -1, 0 or 1."""
    x, y = as_float(a), as_float(b)
    if x == y:
        return 0
    return 1 if x > y else -1
