"""Registry of special forms for the Sigmo evaluator.

Maps identifier names to handlers `handler(form, context)` that receive the
whole raw call form. The evaluator consults this table before evaluating the
head of a list, so these names cannot be rebound to change dispatch.
"""

from sigmo import FormFn
from sigmo.evaluation.special_forms.lambda_form import lambda_form
from sigmo.evaluation.special_forms.define_form import define_form
from sigmo.evaluation.special_forms.set_form import set_form
from sigmo.evaluation.special_forms.progn_form import do_form
from sigmo.evaluation.special_forms.if_form import if_form
from sigmo.evaluation.special_forms.loop_forms import while_form, for_form
from sigmo.evaluation.special_forms.let_form import let_form
from sigmo.evaluation.special_forms.condition_forms import cond_form, guard_form, assert_form
from sigmo.evaluation.special_forms.namespace_form import namespace_form
from sigmo.evaluation.special_forms.import_form import import_form
from sigmo.evaluation.special_forms.macro_form import macro_form
from sigmo.evaluation.special_forms.input_form import input_form

SPECIAL_FORMS: dict[str, FormFn] = {
    "lambda": lambda_form,
    "def": define_form,
    "set!": set_form,
    "do": do_form,
    "if": if_form,
    "while": while_form,
    "for": for_form,
    "let": let_form,
    "cond": cond_form,
    "guard": guard_form,
    "assert": assert_form,
    "namespace": namespace_form,
    "import": import_form,
    "macro": macro_form,
    "input": input_form,
}
