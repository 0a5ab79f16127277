from __future__ import annotations

from typing import TYPE_CHECKING

from sigmo.types.value import Value, NIL, error, is_error

if TYPE_CHECKING:
    from sigmo.types.context import Context


class Hash(Value):
    """Two disjoint keyspaces (string keys and symbol keys) plus the raw
    key/value forms collected by the parser and not yet evaluated.
    """

    __slots__ = ("vals", "sym_vals", "pairs")

    def __init__(
        self,
        vals: dict[str, Value] | None = None,
        sym_vals: dict[str, Value] | None = None,
        pairs: list[Value] | None = None,
    ):
        self.vals: dict[str, Value] = vals if vals is not None else {}
        self.sym_vals: dict[str, Value] = sym_vals if sym_vals is not None else {}
        self.pairs: list[Value] = pairs if pairs is not None else []

    @property
    def type(self) -> str:
        return "hash"

    @property
    def value(self) -> tuple[dict[str, Value], dict[str, Value]]:
        return self.vals, self.sym_vals

    def append(self, value: Value) -> None:
        self.pairs.append(value)

    def eval(self, context: Context) -> Value:
        """Materialize pending pairs into the keyspaces and return self.

        Keys must evaluate to a string or a symbol; a trailing key with no
        value binds to nil. Nothing is merged unless every pair succeeds.
        """
        if not self.pairs:
            return self

        staged_vals: dict[str, Value] = {}
        staged_syms: dict[str, Value] = {}
        for i in range(0, len(self.pairs), 2):
            key = self.pairs[i].eval(context)
            if is_error(key):
                return key
            if key.type not in ("string", "symbol"):
                return error(
                    f"Hash keys must be of type 'string' or 'symbol', got type '{key.type}'"
                )
            val = NIL
            if i + 1 < len(self.pairs):
                val = self.pairs[i + 1].eval(context)
                if is_error(val):
                    return val
            target = staged_vals if key.type == "string" else staged_syms
            target[key.value] = val

        self.vals.update(staged_vals)
        self.sym_vals.update(staged_syms)
        self.pairs = []
        return self

    def copy(self) -> Hash:
        return Hash(
            {k: v.copy() for k, v in self.vals.items()},
            {k: v.copy() for k, v in self.sym_vals.items()},
            [p.copy() for p in self.pairs],
        )

    def get(self, key: Value) -> Value:
        space = self.vals if key.type == "string" else self.sym_vals
        return space.get(key.value, NIL)

    def put(self, key: Value, val: Value) -> None:
        space = self.vals if key.type == "string" else self.sym_vals
        space[key.value] = val

    def contains(self, key: Value) -> bool:
        space = self.vals if key.type == "string" else self.sym_vals
        return key.value in space

    def __len__(self) -> int:
        return len(self.vals) + len(self.sym_vals)

    def __str__(self) -> str:
        parts = [f'"{k}" {v}' for k, v in self.vals.items()]
        parts += [f"{k} {v}" for k, v in self.sym_vals.items()]
        parts += [str(p) for p in self.pairs]
        return "{" + " ".join(parts) + "}"

    def __repr__(self) -> str:
        return f"Hash(vals={self.vals!r}, sym_vals={self.sym_vals!r}, pairs={self.pairs!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Hash):
            return False
        return (
            self.vals == other.vals
            and self.sym_vals == other.sym_vals
            and self.pairs == other.pairs
        )

    __hash__ = None
