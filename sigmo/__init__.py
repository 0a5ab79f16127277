# Core type aliases for Sigmo's data model.
# Every runtime value (and every piece of parsed code) is an instance of
# sigmo.types.value.Value; the aliases below exist so signatures in the
# reader, evaluator and special forms read the way the data flows.
#
# Naming guidance:
# - LispValue: any Value, code or data.
# - FormFn:    a special-form handler, called with the raw call form and context.
# - NativeFn:  a native function body, called with (context, evaluated args).

from typing import Any, Callable

LispValue = Any

FormFn = Callable[..., LispValue]

NativeFn = Callable[..., LispValue]
