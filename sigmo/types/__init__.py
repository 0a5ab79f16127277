from sigmo.types.value import Value, Atom, TRUE, FALSE, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.hash_value import Hash
from sigmo.types.function import Function, Macro
from sigmo.types.context import Context

__all__ = [
    "Value",
    "Atom",
    "List",
    "Hash",
    "Function",
    "Macro",
    "Context",
    "TRUE",
    "FALSE",
    "NIL",
    "error",
    "is_error",
]
