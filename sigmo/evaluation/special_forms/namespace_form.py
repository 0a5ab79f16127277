from sigmo.types.value import Value
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.util import evaluate_body
from sigmo.evaluation.special_forms.checks import arity_error, expect_identifier


def namespace_form(form: List, context: Context) -> Value:
    """
    (namespace a/b body...)

    Evaluates the body inside the absolute namespace `a/b`, creating it (and
    `a`) on first use. Definitions made there are visible as `a/b/name`.
    """
    if len(form.children) < 2:
        return arity_error("namespace", "at least 1", form)
    if (err := expect_identifier("namespace", form, 0)) is not None:
        return err

    target = context.namespace(form.children[1].value)
    return evaluate_body(form.children[2:], target)
