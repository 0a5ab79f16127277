from sigmo.types.value import Value, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.special_forms.checks import arity_error, expect_identifier


def set_form(form: List, context: Context) -> Value:
    """(set! name value) rebinds the nearest existing binding; unbound is an error."""
    if len(form.children) != 3:
        return arity_error("set!", "2", form)
    if (err := expect_identifier("set!", form, 0)) is not None:
        return err

    value = form.children[2].eval(context)
    if is_error(value):
        return value
    return context.set_existing(form.children[1].value, value)
