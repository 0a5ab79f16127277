"""Special forms: cond, guard and assert.

- cond:   first clause (test expr) whose test is truthy wins.
- guard:  turns an error result into a call to a handler.
- assert: error result unless the test is truthy.
"""

from sigmo.types.value import Value, NIL, TRUE, error, is_error, string
from sigmo.types.list_value import List
from sigmo.types.function import Function, Macro
from sigmo.types.context import Context
from sigmo.evaluation.util import truthy
from sigmo.evaluation.special_forms.checks import arity_error, type_error


def cond_form(form: List, context: Context) -> Value:
    """(cond (test expr) ...) -> expr of the first truthy test, else nil."""
    for clause in form.children[1:]:
        if not isinstance(clause, List):
            return error(f"Clauses of 'cond' must be of type 'list', got type '{clause.type}'")
        if len(clause.children) != 2:
            return error(f"Clauses of 'cond' must have exactly 2 elements, got {len(clause.children)}")

        test = clause.children[0].eval(context)
        if is_error(test):
            return test
        if truthy(test):
            return clause.children[1].eval(context)
    return NIL


def guard_form(form: List, context: Context) -> Value:
    """
    (guard expr [handler])

    A non-error result of `expr` is returned as is. An error result is
    swallowed (nil) without a handler; otherwise the error message, as a
    string, is passed to the handler. A Function handler receives it as its
    single argument and a Macro handler sees it as the first raw argument.
    """
    if len(form.children) not in (2, 3):
        return arity_error("guard", "1 or 2", form)

    result = form.children[1].eval(context)
    if not is_error(result):
        return result
    if len(form.children) == 2:
        return NIL

    message = string(result.value)
    handler = form.children[2].eval(context)
    match handler:
        case Function():
            return handler.call([message], context)
        case Macro():
            return handler.call(List([NIL, message]), context)
        case _ if is_error(handler):
            return handler
        case _:
            return type_error("guard", 1, "function", handler)


def assert_form(form: List, context: Context) -> Value:
    """(assert test) -> true, or an error naming the failed form."""
    if len(form.children) != 2:
        return arity_error("assert", "1", form)

    test = form.children[1].eval(context)
    if is_error(test):
        return test
    if truthy(test):
        return TRUE
    return error(f"Assert failed '{form.children[1]}'")
