from sigmo.types.value import Value, NIL, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.util import truthy
from sigmo.evaluation.special_forms.checks import arity_error


def if_form(form: List, context: Context) -> Value:
    """(if test then [else]); a missing else branch yields nil."""
    if len(form.children) not in (3, 4):
        return arity_error("if", "2 or 3", form)

    test = form.children[1].eval(context)
    if is_error(test):
        return test
    if truthy(test):
        return form.children[2].eval(context)
    if len(form.children) == 4:
        return form.children[3].eval(context)
    return NIL
