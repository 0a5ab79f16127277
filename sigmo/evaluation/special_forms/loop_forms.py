"""Special forms: while and for.

- while: re-evaluates its body in the *same* context while the test is truthy.
- for:   maps one body expression over a list inside a single child context.
"""

from sigmo.types.value import Value, Atom, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.util import truthy
from sigmo.evaluation.special_forms.checks import arity_error


def while_form(form: List, context: Context) -> Value:
    """(while test body...) -> value of the last body form run, or nil."""
    if len(form.children) < 2:
        return arity_error("while", "at least 1", form)

    test_expr, body = form.children[1], form.children[2:]
    last: Value = NIL
    while True:
        test = test_expr.eval(context)
        if is_error(test):
            return test
        if not truthy(test):
            return last
        for expr in body:
            last = expr.eval(context)
            if is_error(last):
                return last


def for_form(form: List, context: Context) -> Value:
    """(for (name list-expr) body) -> list of body results, one per element."""
    if len(form.children) != 3:
        return arity_error("for", "2", form)

    header = form.children[1]
    if not (
        isinstance(header, List)
        and len(header.children) == 2
        and isinstance(header.children[0], Atom)
        and header.children[0].type == "identifier"
    ):
        return error("First argument to 'for' must be a list of form '(identifier list)'")

    name = header.children[0].value
    body = form.children[2]
    inner = Context(context)

    source = header.children[1].eval(inner)
    if is_error(source):
        return source
    if not isinstance(source, List):
        return error("Second argument of 'for' parameters must evaluate to a list")

    results: list[Value] = []
    for item in source.children:
        bound = item.eval(inner)
        if is_error(bound):
            return bound
        inner.set(name, bound)
        result = body.eval(inner)
        if is_error(result):
            return result
        results.append(result)
    return List(results)
