from sigmo.types.value import Value, error, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.special_forms.checks import expect_identifier


def define_form(form: List, context: Context) -> Value:
    """
    (def name value)
    Binds in the current local scope only and returns the bound value.
    """
    if len(form.children) != 3:
        return error("Wrong number of arguments to 'def'")
    if (err := expect_identifier("def", form, 0)) is not None:
        return err

    value = form.children[2].eval(context)
    if is_error(value):
        return value
    context.set(form.children[1].value, value)
    return value
