from sigmo.types.value import Value
from sigmo.types.list_value import List
from sigmo.types.function import Function
from sigmo.types.context import Context
from sigmo.evaluation.bind import parse_args
from sigmo.evaluation.special_forms.checks import arity_error, type_error


def lambda_form(form: List, context: Context) -> Value:
    """
    (lambda (params) body)

    Locals of the defining context are snapshotted (copied) now. Each call
    runs `body` in a fresh child of the *calling* context, seeded with a copy
    of that snapshot and then the bound parameters. Snapshotted names keep
    their definition-time values; any other name falls through to the live
    call-time chain.
    """
    if len(form.children) != 3:
        return arity_error("lambda", "2", form)
    params, body = form.children[1], form.children[2]
    if not isinstance(params, List):
        return type_error("lambda", 0, "list", params)

    captured = context.copy_locals()

    def invoke(outer: Context, args: list[Value]) -> Value:
        inner = Context(outer)
        inner.update({k: v.copy() for k, v in captured.items()})
        err = parse_args(params, args, inner)
        if err is not None:
            return err
        return body.eval(inner)

    return Function("anonymous", "**", invoke)
