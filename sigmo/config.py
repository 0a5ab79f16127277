from __future__ import annotations
import logging
import os
from pathlib import Path


DEFAULT_EXTENSION = '.mo'
DEFAULT_HISTORY = Path('~') / '.sigmo_history'


def get_import_root() -> Path:
    """Directory that identifier-form imports are resolved against."""
    raw = os.environ.get('SIGMO_ROOT')
    if not raw:
        return Path.cwd()
    return Path(raw.strip())


def get_import_extension() -> str:
    ext = os.environ.get('SIGMO_EXT', DEFAULT_EXTENSION).strip() or DEFAULT_EXTENSION
    return ext if ext.startswith('.') else '.' + ext


def get_history_file() -> Path:
    raw = os.environ.get('SIGMO_HISTORY')
    p = Path(raw) if raw else DEFAULT_HISTORY
    return p.expanduser()


def get_log_level() -> int:
    """
    Determine log level from LOGLEVEL environment variable.
    Defaults to WARNING if not set.
    """
    loglevel_env = os.getenv('LOGLEVEL', '').upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level
    return logging.WARNING
