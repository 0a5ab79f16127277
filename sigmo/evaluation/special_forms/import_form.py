"""Special form: import.

(import core/math)    -> <import root>/core/math<ext>
(import "lib/x.mo")   -> the literal path

The file is read and every form evaluated in the *current* context, so its
definitions land wherever the import appears.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sigmo import config
from sigmo.errors import SigmoSyntaxError
from sigmo.loader import read_source
from sigmo.reader.parser import read
from sigmo.types.value import Value, Atom, NIL, error, is_error
from sigmo.types.list_value import List
from sigmo.types.context import Context
from sigmo.evaluation.special_forms.checks import arity_error, type_error

log = logging.getLogger(__name__)


def resolve_import(target: Atom) -> Path:
    if target.type == "string":
        return Path(target.value)
    return config.get_import_root() / f"{target.value}{config.get_import_extension()}"


def import_form(form: List, context: Context) -> Value:
    if len(form.children) != 2:
        return arity_error("import", "1", form)
    target = form.children[1]
    if not (isinstance(target, Atom) and target.type in ("identifier", "string")):
        return type_error("import", 0, "identifier|string", target)

    path = resolve_import(target)
    log.debug("importing %s", path)
    try:
        forms = read(read_source(path))
    except (OSError, SigmoSyntaxError) as ex:
        return error(f"error during import of '{path}': {ex}")

    last: Value = NIL
    for node in forms:
        last = node.eval(context)
        if is_error(last):
            return last
    return last
