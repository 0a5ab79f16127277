from sigmo.types.value import Value
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.util import evaluate_body


def do_form(form: List, context: Context) -> Value:
    return evaluate_body(form.children[1:], context)
