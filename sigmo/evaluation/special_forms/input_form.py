import sys

from sigmo.types.value import Value, error, string
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.special_forms.checks import arity_error


def input_form(form: List, context: Context) -> Value:
    """(input) reads one line from stdin, without its line terminator."""
    if len(form.children) != 1:
        return arity_error("input", "0", form)
    try:
        line = sys.stdin.readline()
    except OSError as ex:
        return error(f"Could not read input: {ex}")
    if not line:
        return error("End of input")
    return string(line.rstrip("\r\n"))
