from __future__ import annotations

from typing import Iterable, Iterator, TYPE_CHECKING

from sigmo.types.value import Value

if TYPE_CHECKING:
    from sigmo.types.context import Context


class List(Value):
    """Ordered, mutable sequence of values.

    A quoted list ('(...)) is a self-evaluating literal; an unquoted list is an
    executable form whose evaluation is defined in sigmo.evaluation.evaluator.
    """

    __slots__ = ("children", "quoted")

    def __init__(self, children: Iterable[Value] | None = None, quoted: bool = False):
        self.children: list[Value] = list(children) if children is not None else []
        self.quoted: bool = quoted

    @property
    def type(self) -> str:
        return "list"

    @property
    def value(self) -> list[Value]:
        return self.children

    def eval(self, context: Context) -> Value:
        # Imported lazily: the evaluator depends on the whole value model.
        from sigmo.evaluation.evaluator import evaluate_list
        return evaluate_list(self, context)

    def copy(self) -> List:
        return List([child.copy() for child in self.children], self.quoted)

    def append(self, value: Value) -> None:
        self.children.append(value)

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.children)

    def __getitem__(self, index):
        return self.children[index]

    def __str__(self) -> str:
        body = " ".join(str(child) for child in self.children)
        return f"'({body})" if self.quoted else f"({body})"

    def __repr__(self) -> str:
        return f"List({self.children!r}, quoted={self.quoted})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, List):
            return False
        return self.children == other.children

    __hash__ = None
