"""Parameter binding for Sigmo lambdas.

Declared parameters are matched against evaluated arguments in order:

- identifier      binds one argument (copied); too few arguments is an error
- name...         binds every remaining argument (copied) as one list and stops
- name#Type       binds the argument if its type is Type, otherwise coerces it
                  by calling the Function bound to `Type` (e.g. int, string)
"""

from __future__ import annotations

from typing import Optional

from sigmo.types.value import Value, Atom, error, is_error
from sigmo.types.list_value import List
from sigmo.types.function import Function
from sigmo.types.context import Context


def _missing(params: List, args: list[Value]) -> Atom:
    return error(f"Not enough arguments: expected {len(params.children)}, got {len(args)}")


def parse_args(params: List, args: list[Value], context: Context) -> Optional[Atom]:
    """Bind `args` to `params` in `context`; return an error atom on failure."""
    for i, param in enumerate(params.children):
        match param:
            case Atom(type="identifier"):
                if i >= len(args):
                    return _missing(params, args)
                context.set(param.value, args[i].copy())
            case Atom(type="expansion"):
                context.set(param.value, List([a.copy() for a in args[i:]]))
                return None
            case Atom(type="typed-id"):
                if i >= len(args):
                    return _missing(params, args)
                name, _, type_name = param.value.partition("#")
                bound = coerce(args[i], type_name, context)
                if is_error(bound):
                    return error(f"Argument '{name}': {bound.value}")
                context.set(name, bound)
            case _:
                return error(f"Cannot use type '{param.type}' in function argument list")
    return None


def coerce(arg: Value, type_name: str, context: Context) -> Value:
    """Return `arg` (copied) if it already has `type_name`, else convert it."""
    if arg.type == type_name:
        return arg.copy()
    converter = context.get(type_name)
    if not isinstance(converter, Function):
        return error(f"expected type '{type_name}', got type '{arg.type}'")
    return converter.call([arg], context)
