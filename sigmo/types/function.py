"""Invocable values: native/closure Functions and Macros.

A Function may carry an argument signature: comma-separated positional type
tokens checked against the evaluated arguments before the native body runs.

    int|float   the argument's type must be one of the alternatives
    *           any single argument
    +           one or more further arguments, each checked against the
                previous position's constraint (makes the call variadic)
    **          the rest of the arguments, unchecked (makes the call variadic)
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from sigmo import NativeFn
from sigmo.types.value import Value, Atom, error

if TYPE_CHECKING:
    from sigmo.types.context import Context
    from sigmo.types.list_value import List


def parse_signature(signature: Optional[str]) -> Optional[list[str]]:
    if signature is None:
        return None
    signature = signature.strip()
    if not signature:
        return []
    return [t.strip() for t in signature.split(",")]


def check_signature(name: str, types: Optional[list[str]], args: list[Value]) -> Optional[Atom]:
    """Return an error atom describing the first mismatch, or None."""
    if types is None or types == ["**"]:
        return None

    variadic = False
    for i, t in enumerate(types):
        if t == "**":
            variadic = True
            break
        if t == "+":
            if i < 1:
                return error(f"Function '{name}' cannot have '+' as first argtype parameter.")
            if i >= len(args):
                return error(f"Function '{name}' expected {len(types)} args, only got {len(args)}.")
            expected = types[i - 1]
            if expected not in ("*", "**"):
                allowed = expected.split("|")
                for j in range(i, len(args)):
                    if args[j].type not in allowed:
                        return error(
                            f"Function '{name}' expected argument {j} of type '{expected}', "
                            f"got type '{args[j].type}'."
                        )
            variadic = True
            break
        if i >= len(args):
            return error(f"Function '{name}' expected {len(types)} args, only got {len(args)}.")
        if t == "*":
            continue
        if args[i].type not in t.split("|"):
            return error(
                f"Function '{name}' expected argument {i} of type '{t}', got type '{args[i].type}'."
            )

    if not variadic and len(args) > len(types):
        return error(f"Function '{name}' expected {len(types)} args, but got {len(args)}.")
    return None


class Function(Value):
    """Wraps a native body `impl(context, args) -> Value`.

    Functions are reference-transparent: copying returns the same callable.
    """

    __slots__ = ("name", "signature", "impl", "_types")

    def __init__(self, name: str, signature: Optional[str], impl: NativeFn):
        self.name = name
        self.signature = signature
        self.impl = impl
        self._types = parse_signature(signature)

    @property
    def type(self) -> str:
        return "function"

    @property
    def value(self) -> NativeFn:
        return self.impl

    def eval(self, context: Context) -> Value:
        return self

    def copy(self) -> Function:
        return self

    def call(self, args: list[Value], context: Context) -> Value:
        err = check_signature(self.name, self._types, args)
        if err is not None:
            return err
        return self.impl(context, args)

    def __str__(self) -> str:
        return f"<function {self.name}>"

    __repr__ = __str__


class Macro(Value):
    """Receives the raw, unevaluated call form: `impl(context, form) -> Value`."""

    __slots__ = ("name", "impl")

    def __init__(self, name: str, impl: NativeFn):
        self.name = name
        self.impl = impl

    @property
    def type(self) -> str:
        return "macro"

    @property
    def value(self) -> NativeFn:
        return self.impl

    def eval(self, context: Context) -> Value:
        return self

    def copy(self) -> Macro:
        return self

    def call(self, form: List, context: Context) -> Value:
        return self.impl(context, form)

    def __str__(self) -> str:
        return f"<macro {self.name}>"

    __repr__ = __str__
