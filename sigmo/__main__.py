"""Command line entry point: `python -m sigmo` or `sigmo`."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sigmo.config import get_log_level
from sigmo.errors import SigmoError
from sigmo.interpreter import Interpreter
from sigmo.repl import Repl
from sigmo.types.value import NIL, is_error

log = logging.getLogger("sigmo")

# Each Sigmo call spans several Python frames.
RECURSION_LIMIT = 5000
RECURSION_MESSAGE = "maximum recursion depth exceeded"


def run_command(interpreter: Interpreter, code: str) -> int:
    """Evaluate `code`, echo a non-nil result; non-zero status on error."""
    try:
        result = interpreter.eval(code)
    except SigmoError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    except RecursionError:
        print(f"error: {RECURSION_MESSAGE}", file=sys.stderr)
        return 1
    if is_error(result):
        print(result, file=sys.stderr)
        return 1
    if result is not NIL:
        print(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sigmo",
        description="Sigmo: a small Lisp-family scripting language",
    )
    parser.add_argument("file", type=Path, nargs="?", help="program to load")
    parser.add_argument("-c", dest="command", metavar="CODE", help="evaluate CODE and print the result")
    parser.add_argument("-i", dest="interactive", action="store_true",
                        help="enter the REPL after running FILE or CODE")
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_log_level(), stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")
    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    interpreter = Interpreter()
    status = 0
    try:
        if args.file is not None:
            interpreter.load(args.file)
    except SigmoError as ex:
        log.error("%s", ex)
        return 1
    except RecursionError:
        log.error("%s: %s", args.file, RECURSION_MESSAGE)
        return 1

    if args.command is not None:
        status = run_command(interpreter, args.command)

    if args.interactive or (args.file is None and args.command is None):
        Repl(interpreter).run()
    return status


if __name__ == "__main__":
    sys.exit(main())
