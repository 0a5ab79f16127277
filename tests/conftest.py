import pytest

from sigmo.interpreter import Interpreter


@pytest.fixture
def itp():
    """A fresh interpreter session (root context with builtins)."""
    return Interpreter()


@pytest.fixture
def run(itp):
    """Evaluate each snippet in order in one session; return the last result."""
    def _run(*snippets: str):
        result = None
        for code in snippets:
            result = itp.eval(code)
        return result
    return _run
