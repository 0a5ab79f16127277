from __future__ import annotations

from pathlib import Path

from sigmo.errors import SigmoLoadError
from sigmo.reader.parser import read
from sigmo.types.value import Value, NIL, is_error
from sigmo.types.context import Context
from sigmo.builtin.env_builtin import register
from sigmo.loader import load_file


class Interpreter:
    """
    An interpreter session for Sigmo code.
    Owns the root Context (and with it the namespace tree) across calls.
    """
    def __init__(self, prelude: str | None = None):
        self.root = Context()
        register(self.root)

        if prelude:
            result = self.eval(prelude)
            if is_error(result):
                raise SigmoLoadError(f"prelude: {result.value}")

    def eval(self, code: str) -> Value:
        """Evaluate every top-level form of `code` in the root context.

        Returns the last value, or the first error (evaluation stops there).
        Raises SigmoSyntaxError if the code does not parse.
        """
        last: Value = NIL
        for form in read(code):
            last = form.eval(self.root)
            if is_error(last):
                return last
        return last

    def load(self, path: str | Path) -> Value:
        """Batch-load a file; any failure raises SigmoLoadError."""
        return load_file(path, self.root)
