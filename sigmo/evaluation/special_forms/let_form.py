from sigmo.types.value import Value, Atom, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.util import evaluate_body
from sigmo.evaluation.special_forms.checks import arity_error, type_error


def let_form(form: List, context: Context) -> Value:
    """
    (let (name1 value1 name2 value2 ...) body...)

    Bindings are made one after another in a single child context, so later
    values can see earlier names. A trailing name without a value binds nil.
    """
    if len(form.children) < 2:
        return arity_error("let", "at least 1", form)
    bindings = form.children[1]
    if not isinstance(bindings, List):
        return type_error("let", 0, "list", bindings)

    inner = Context(context)
    pairs = bindings.children
    for i in range(0, len(pairs), 2):
        name = pairs[i]
        if not (isinstance(name, Atom) and name.type == "identifier"):
            return error("Even parameters to 'let' must be identifiers")
        value = pairs[i + 1].eval(inner) if i + 1 < len(pairs) else NIL
        if is_error(value):
            return value
        inner.set(name.value, value)

    return evaluate_body(form.children[2:], inner)
