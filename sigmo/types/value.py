"""Value protocol and the Atom scalar variant.

Every runtime value (and every parsed form) implements the same small
contract: a textual rendering (`str()`), `eval(context)`, a raw payload
(`value`), a string type tag (`type`) used for dynamic dispatch and argument
signatures, and `copy()`.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from sigmo.types.context import Context


ATOM_TYPES = frozenset(
    {
        "int",
        "float",
        "bool",
        "string",
        "symbol",
        "identifier",
        "type",
        "typed-id",
        "expansion",
        "nil",
        "error",
    }
)


class Value:
    """Base class of the closed variant set: Atom, List, Hash, Function, Macro."""

    __slots__ = ()

    @property
    def type(self) -> str:
        raise NotImplementedError

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def eval(self, context: Context) -> Value:
        raise NotImplementedError

    def copy(self) -> Value:
        raise NotImplementedError


class Atom(Value):
    """Immutable scalar tagged with one of ATOM_TYPES."""

    __slots__ = ("_type", "_value")

    def __init__(self, type_: str, value: Any = None):
        if type_ not in ATOM_TYPES:
            raise ValueError(f"Unknown atom type {type_!r}")
        object.__setattr__(self, "_type", type_)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Atom is immutable")

    @property
    def type(self) -> str:
        return self._type

    @property
    def value(self) -> Any:
        return self._value

    def eval(self, context: Context) -> Value:
        # Only names do work; everything else is self-evaluating.
        if self._type in ("identifier", "expansion"):
            return context.get(self._value)
        return self

    def copy(self) -> Atom:
        return self

    def __str__(self) -> str:
        match self._type:
            case "int":
                return str(self._value)
            case "float":
                return repr(self._value)
            case "bool":
                return "true" if self._value else "false"
            case "string":
                return f'"{self._value}"'
            case "expansion":
                return f"{self._value}..."
            case "type":
                return f"#{self._value}"
            case "nil":
                return "nil"
            case "error":
                return f"error: {self._value}"
            case _:
                return str(self._value)

    def __repr__(self) -> str:
        return f"Atom({self._type!r}, {self._value!r})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Atom)
            and self._type == other._type
            and self._value == other._value
        )

    def __hash__(self) -> int:
        return hash((self._type, self._value))


TRUE = Atom("bool", True)
FALSE = Atom("bool", False)
NIL = Atom("nil")


def error(message: str) -> Atom:
    """Build an `error` atom; the language's only failure value."""
    return Atom("error", message)


def is_error(value: Value) -> bool:
    return isinstance(value, Atom) and value.type == "error"


def boolean(flag: bool) -> Atom:
    return TRUE if flag else FALSE


def string(text: str) -> Atom:
    return Atom("string", text)
