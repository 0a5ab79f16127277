"""Built-in functions for the Sigmo root context.

This module defines core arithmetic, comparison, logic, output, string, list,
hash and conversion functions exposed to Sigmo code, plus `register` which
installs them (and their aliases) into a Context.

Every built-in is a native body `fn(context, args)`; argument counts and types
are validated by the signature given at registration, so bodies can assume
well-formed input and only report value-level failures (bad index, division by
zero, unparsable text) as error atoms.
"""
from __future__ import annotations

import math

from sigmo.errors import SigmoSyntaxError
from sigmo.reader.parser import read
from sigmo.types.value import Value, Atom, NIL, error, is_error, boolean
from sigmo.types.value import string as make_string
from sigmo.types.list_value import List
from sigmo.types.function import Function
from sigmo.types.context import Context
from sigmo.evaluation.util import (
    truthy,
    compare,
    add as add_values,
    negate,
    multiply,
    divide,
    compare_num,
)


def _to_text(value: Value) -> str:
    """Printable form: strings raw, everything else rendered."""
    if isinstance(value, Atom) and value.type == "string":
        return value.value
    return str(value)


# -------------------------------
# Arithmetic
# -------------------------------
def add(context: Context, args: list[Value]) -> Value:
    """Fold + over the arguments; int iff every argument is an int."""
    total = args[0]
    for n in args[1:]:
        total = add_values(total, n)
    return total


def sub(context: Context, args: list[Value]) -> Value:
    return add_values(args[0], negate(args[1]))


def mul(context: Context, args: list[Value]) -> Value:
    product = args[0]
    for n in args[1:]:
        product = multiply(product, n)
    return product


def div(context: Context, args: list[Value]) -> Value:
    return divide(args[0], args[1])


def mod(context: Context, args: list[Value]) -> Value:
    """(mod n d) => remainder with the sign of n."""
    n, d = args[0].value, args[1].value
    if d == 0:
        return error("Division by zero")
    r = abs(n) % abs(d)
    return Atom("int", r if n >= 0 else -r)


# -------------------------------
# Comparison & logic
# -------------------------------
def lt(context: Context, args: list[Value]) -> Value:
    return boolean(compare_num(args[0], args[1]) < 0)


def lte(context: Context, args: list[Value]) -> Value:
    return boolean(compare_num(args[0], args[1]) <= 0)


def gt(context: Context, args: list[Value]) -> Value:
    return boolean(compare_num(args[0], args[1]) > 0)


def gte(context: Context, args: list[Value]) -> Value:
    return boolean(compare_num(args[0], args[1]) >= 0)


def equals(context: Context, args: list[Value]) -> Value:
    return boolean(compare(args[0], args[1]))


def not_equals(context: Context, args: list[Value]) -> Value:
    return boolean(not compare(args[0], args[1]))


def logical_and(context: Context, args: list[Value]) -> Value:
    return boolean(all(truthy(a) for a in args))


def logical_or(context: Context, args: list[Value]) -> Value:
    return boolean(any(truthy(a) for a in args))


def logical_xor(context: Context, args: list[Value]) -> Value:
    return boolean(truthy(args[0]) != truthy(args[1]))


def logical_not(context: Context, args: list[Value]) -> Value:
    return boolean(not truthy(args[0]))


# -------------------------------
# Output & strings
# -------------------------------
def print_builtin(context: Context, args: list[Value]) -> Value:
    """Write space-separated args to stdout without a trailing newline."""
    print(" ".join(_to_text(a) for a in args), end="")
    return NIL


def println_builtin(context: Context, args: list[Value]) -> Value:
    print(" ".join(_to_text(a) for a in args))
    return NIL


def cat(context: Context, args: list[Value]) -> Value:
    return make_string("".join(a.value for a in args))


def trim(context: Context, args: list[Value]) -> Value:
    """(trim text chars) strips any of `chars` from both ends of `text`."""
    return make_string(args[0].value.strip(args[1].value))


def join(context: Context, args: list[Value]) -> Value:
    return make_string(args[1].value.join(_to_text(c) for c in args[0].children))


def split(context: Context, args: list[Value]) -> Value:
    text, sep = args[0].value, args[1].value
    if not sep:
        return error("Cannot split on an empty separator")
    return List(make_string(s) for s in text.split(sep))


def split_n(context: Context, args: list[Value]) -> Value:
    """(split-n text sep n) returns at most n parts; n < 0 means no limit."""
    text, sep, n = args[0].value, args[1].value, args[2].value
    if not sep:
        return error("Cannot split on an empty separator")
    if n == 0:
        return List()
    parts = text.split(sep) if n < 0 else text.split(sep, n - 1)
    return List(make_string(s) for s in parts)


def parse_int(context: Context, args: list[Value]) -> Value:
    s = args[0].value
    try:
        return Atom("int", int(s, 10))
    except ValueError:
        return error(f"Could not convert string '{s}' to an integer.")


def parse_float(context: Context, args: list[Value]) -> Value:
    s = args[0].value
    try:
        f = float(s)
    except ValueError:
        return error(f"Could not convert string '{s}' to a float.")
    return Atom("float", f)


# -------------------------------
# Lists
# -------------------------------
def list_builtin(context: Context, args: list[Value]) -> Value:
    return List(args)


def head(context: Context, args: list[Value]) -> Value:
    items = args[0].children
    if not items:
        return error("Cannot take the head of an empty list")
    return items[0]


def tail(context: Context, args: list[Value]) -> Value:
    return List(args[0].children[1:])


def cons(context: Context, args: list[Value]) -> Value:
    """Concatenate two values into a new list; non-list operands are wrapped."""
    out: list[Value] = []
    for operand in args:
        if isinstance(operand, List):
            out.extend(operand.children)
        else:
            out.append(operand)
    return List(out)


def rev(context: Context, args: list[Value]) -> Value:
    target = args[0]
    if isinstance(target, List):
        return List(reversed(target.children))
    return make_string(target.value[::-1])


def length(context: Context, args: list[Value]) -> Value:
    target = args[0]
    if isinstance(target, Atom):
        return Atom("int", len(target.value))
    return Atom("int", len(target))


def get(context: Context, args: list[Value]) -> Value:
    """(get list i); negative indexes count from the end."""
    items, i = args[0].children, args[1].value
    index = i + len(items) if i < 0 else i
    if 0 <= index < len(items):
        return items[index]
    return error(f"Index '{i}' out of list bounds.")


# -------------------------------
# Evaluation
# -------------------------------
def exec_builtin(context: Context, args: list[Value]) -> Value:
    """Evaluate an unquoted copy of a (quoted) list in the caller's context."""
    form = args[0].copy()
    form.quoted = False
    return form.eval(context)


def eval_builtin(context: Context, args: list[Value]) -> Value:
    """Read source text and evaluate each form; the last value or first error."""
    try:
        forms = read(args[0].value)
    except SigmoSyntaxError as ex:
        return error(str(ex))
    last: Value = NIL
    for form in forms:
        last = form.eval(context)
        if is_error(last):
            return last
    return last


# -------------------------------
# Hashes
# -------------------------------
def hget(context: Context, args: list[Value]) -> Value:
    return args[0].get(args[1])


def hset(context: Context, args: list[Value]) -> Value:
    """(hset! h key value) mutates `h` in place and returns it."""
    args[0].put(args[1], args[2])
    return args[0]


def hcontains(context: Context, args: list[Value]) -> Value:
    return boolean(args[0].contains(args[1]))


# -------------------------------
# Types & conversions
# -------------------------------
def type_of(context: Context, args: list[Value]) -> Value:
    return Atom("type", args[0].type)


def to_int(context: Context, args: list[Value]) -> Value:
    x = args[0]
    match x.type:
        case "int":
            return x
        case "float":
            if math.isinf(x.value) or math.isnan(x.value):
                return error(f"Cannot convert '{x}' to an integer.")
            return Atom("int", int(x.value))
        case _:
            return parse_int(context, args)


def to_float(context: Context, args: list[Value]) -> Value:
    x = args[0]
    match x.type:
        case "float":
            return x
        case "int":
            return Atom("float", float(x.value))
        case _:
            return parse_float(context, args)


def to_string(context: Context, args: list[Value]) -> Value:
    x = args[0]
    if x.type == "string":
        return x
    return make_string(str(x))


def to_bool(context: Context, args: list[Value]) -> Value:
    return boolean(truthy(args[0]))


def _round(x: Atom, rounder) -> Value:
    if math.isinf(x.value) or math.isnan(x.value):
        return error(f"Cannot round '{x}'.")
    return Atom("float", float(rounder(x.value)))


def floor(context: Context, args: list[Value]) -> Value:
    return _round(args[0], math.floor)


def ceil(context: Context, args: list[Value]) -> Value:
    return _round(args[0], math.ceil)


NUMBER = "int|float"

BUILTINS: dict[str, tuple[str, object]] = {
    "+": (f"{NUMBER},+", add),
    "-": (f"{NUMBER},{NUMBER}", sub),
    "*": (f"{NUMBER},+", mul),
    "/": (f"{NUMBER},{NUMBER}", div),
    "mod": ("int,int", mod),
    "lt": (f"{NUMBER},{NUMBER}", lt),
    "lte": (f"{NUMBER},{NUMBER}", lte),
    "gt": (f"{NUMBER},{NUMBER}", gt),
    "gte": (f"{NUMBER},{NUMBER}", gte),
    "eq": ("*,*", equals),
    "neq": ("*,*", not_equals),
    "and": ("bool,+", logical_and),
    "or": ("bool,+", logical_or),
    "xor": ("bool,bool", logical_xor),
    "not": ("*", logical_not),
    "print": ("**", print_builtin),
    "println": ("**", println_builtin),
    "cat": ("string,+", cat),
    "trim": ("string,string", trim),
    "join": ("list,string", join),
    "split": ("string,string", split),
    "split-n": ("string,string,int", split_n),
    "parse-int": ("string", parse_int),
    "parse-float": ("string", parse_float),
    "list": ("**", list_builtin),
    "head": ("list", head),
    "tail": ("list", tail),
    "cons": ("*,*", cons),
    "rev": ("list|string", rev),
    "len": ("list|string|hash", length),
    "get": ("list,int", get),
    "exec": ("list", exec_builtin),
    "eval": ("string", eval_builtin),
    "hget": ("hash,string|symbol", hget),
    "hset!": ("hash,string|symbol,*", hset),
    "hcontains": ("hash,string|symbol", hcontains),
    "type": ("*", type_of),
    "int": ("int|float|string", to_int),
    "float": ("int|float|string", to_float),
    "string": ("*", to_string),
    "bool": ("*", to_bool),
    "floor": ("float", floor),
    "ceil": ("float", ceil),
}

ALIASES: dict[str, str] = {
    "first": "head",
    "rest": "tail",
    "add": "+",
    "sub": "-",
    "div": "/",
    "mul": "*",
    "equal": "eq",
    "=": "eq",
    "!": "not",
    "<": "lt",
    ">": "gt",
}


def register(context: Context) -> None:
    """Register all builtin functions and their aliases into the given context."""
    functions = {name: Function(name, sig, fn) for name, (sig, fn) in BUILTINS.items()}
    context.update(functions)
    context.update({alias: functions[target] for alias, target in ALIASES.items()})
