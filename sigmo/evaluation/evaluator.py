"""Core evaluator for the Sigmo interpreter.

Implements List evaluation: special-form, macro and function dispatch with
expansion splicing and error short-circuiting.

Evaluation is plain recursion on the host stack: there is no tail-call
elimination, so very deep recursion ends in RecursionError.
"""

from __future__ import annotations

from sigmo.types.value import Value, Atom, error, is_error
from sigmo.types.list_value import List
from sigmo.types.function import Function, Macro
from sigmo.types.context import Context
from sigmo.evaluation.special_forms import SPECIAL_FORMS


def evaluate_list(form: List, context: Context) -> Value:
    """Evaluate a list form in `context`.

    1. Quoted lists are literals.
    2. () evaluates to an empty list.
    3. A head naming a special form receives the raw form.
    4. A head evaluating to a Macro receives the raw form.
    5. Otherwise every child is evaluated left to right (expansions are
       spliced); the first error aborts and is the result.
    6. A Function head is called with the rest; any other head means the
       evaluated list itself is the result (a data list).
    """
    if form.quoted:
        return form
    if not form.children:
        return List()

    first = form.children[0]
    if isinstance(first, Atom) and first.type == "identifier":
        special = SPECIAL_FORMS.get(first.value)
        if special is not None:
            return special(form, context)

    output: list[Value] = []
    rest = form.children
    if not (isinstance(first, Atom) and first.type == "expansion"):
        head = first.eval(context)
        if isinstance(head, Macro):
            return head.call(form, context)
        if is_error(head):
            return head
        output.append(head)
        rest = form.children[1:]

    for child in rest:
        if isinstance(child, Atom) and child.type == "expansion":
            spliced = child.eval(context)
            if is_error(spliced):
                return spliced
            if not isinstance(spliced, List):
                return error(f"Cannot expand value of type '{spliced.type}'")
            output.extend(spliced.children)
            continue
        result = child.eval(context)
        if is_error(result):
            return result
        output.append(result)

    if output and isinstance(output[0], Function):
        return output[0].call(output[1:], context)
    return List(output)
