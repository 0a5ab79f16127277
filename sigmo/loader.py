"""File loading for Sigmo programs.

`read_source` is the plain I/O collaborator used by `import`. `load_file` is
the batch loader: unlike `import`, any failure here is fatal and surfaces as
SigmoLoadError so the host can halt.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sigmo.errors import SigmoSyntaxError, SigmoLoadError
from sigmo.reader.parser import read
from sigmo.types.value import Value, NIL, is_error

if TYPE_CHECKING:
    from sigmo.types.context import Context

log = logging.getLogger(__name__)


def read_source(path: str | Path) -> str:
    return Path(path).read_text(encoding='utf-8')


def load_file(path: str | Path, context: Context) -> Value:
    """Read, parse and evaluate every top-level form of `path` in `context`."""
    log.debug("loading %s", path)
    try:
        forms = read(read_source(path))
    except OSError as ex:
        raise SigmoLoadError(f"cannot read '{path}': {ex}") from ex
    except SigmoSyntaxError as ex:
        raise SigmoLoadError(f"cannot parse '{path}': {ex}") from ex

    last: Value = NIL
    for form in forms:
        last = form.eval(context)
        if is_error(last):
            raise SigmoLoadError(f"{path}: {last.value}")
    return last
