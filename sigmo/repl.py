"""Interactive read-eval-print loop.

Lines are tokenized as they arrive and accumulated until every '(' (or "'(")
has a matching ')', then the collected tokens are parsed and each form is
evaluated in the interpreter's root context. Errors are reported and the
current input is discarded; the session keeps running until `quit` or end of
input.
"""
from __future__ import annotations

import atexit
import logging
from pathlib import Path
from typing import Callable, Optional

from sigmo.config import get_history_file
from sigmo.errors import SigmoError
from sigmo.interpreter import Interpreter
from sigmo.reader.lexer import tokenize
from sigmo.reader.parser import parse
from sigmo.types.value import NIL, is_error

log = logging.getLogger(__name__)

MAIN_PROMPT = "> "
INCOMPLETE_PROMPT = ". "
QUIT = "quit"


def setup_history(histfile: Path) -> None:
    """Enable readline editing and persist history to `histfile`."""
    try:
        import readline
    except ImportError:
        # readline is unavailable on some platforms; editing is optional.
        return
    try:
        readline.read_history_file(histfile)
    except OSError as ex:
        log.debug("no history loaded from %s: %s", histfile, ex)
    readline.set_history_length(1000)
    atexit.register(_write_history, readline, histfile)


def _write_history(readline, histfile: Path) -> None:
    try:
        readline.write_history_file(histfile)
    except OSError as ex:
        log.warning("could not save history to %s: %s", histfile, ex)


def paren_balance(tokens: list[str]) -> int:
    depth = 0
    for t in tokens:
        if t in ("(", "'("):
            depth += 1
        elif t == ")":
            depth -= 1
    return depth


class Repl:
    """
    Read lines from `read_line(prompt)` and report results through `write`.
    Both default to the console; tests inject their own.
    """
    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        read_line: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ):
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.read_line = read_line if read_line is not None else input
        self.write = write if write is not None else print
        self.tokens: list[str] = []

    def run(self) -> None:
        if self.read_line is input:
            setup_history(get_history_file())

        while True:
            prompt = INCOMPLETE_PROMPT if self.tokens else MAIN_PROMPT
            try:
                line = self.read_line(prompt)
            except EOFError:
                return
            line = line.rstrip("\r\n ")
            if not line:
                continue
            if line == QUIT:
                return
            self.feed(line)

    def feed(self, line: str) -> None:
        """Add one line of input; evaluate once the parens balance."""
        self.tokens.extend(tokenize(line))
        if paren_balance(self.tokens) > 0:
            return
        tokens, self.tokens = self.tokens, []
        if tokens:
            self.evaluate(tokens)

    def evaluate(self, tokens: list[str]) -> None:
        log.debug("evaluating %d tokens", len(tokens))
        try:
            for form in parse(tokens):
                result = form.eval(self.interpreter.root)
                if is_error(result):
                    self.write(str(result))
                    return
                if result is not NIL:
                    self.write(str(result))
        except SigmoError as ex:
            self.write(f"error: {ex}")
        except RecursionError:
            self.write("error: maximum recursion depth exceeded")
