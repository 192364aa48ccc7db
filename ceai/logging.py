"""Logging setup shared by the CLI and the API server.

Terminal output goes to stderr at WARNING (DEBUG with ``-v``).  When an
output directory is known, a rotating file at ``<output_dir>/.ceai/ceai.log``
also records messages at ``CEAI_LOG_LEVEL`` (INFO unless set), so a quiet run
still leaves a trace of imputed cells and undefined alphas.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIRNAME = ".ceai"
LOG_FILENAME = "ceai.log"

_ROTATE_AT = 2_000_000  # bytes
_KEEP = 2

_TERMINAL_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# SDK and HTTP loggers are chatty at INFO
_QUIET = ("httpx", "httpcore", "google_genai", "anthropic", "openai")


def log_path(output_dir: Path) -> Path:
    return output_dir / LOG_DIRNAME / LOG_FILENAME


def _parse_log_level(level_str: str) -> int:
    """``"debug"`` → ``logging.DEBUG``; anything unrecognised → INFO."""
    level = logging.getLevelName(level_str.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _terminal_handler(verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter(_TERMINAL_FORMAT))
    return handler


def _file_handler(output_dir: Path) -> logging.Handler:
    path = log_path(output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=_ROTATE_AT, backupCount=_KEEP, encoding="utf-8"
    )
    handler.setLevel(_parse_log_level(os.environ.get("CEAI_LOG_LEVEL", "INFO")))
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def setup_logging(*, output_dir: Path | None = None, verbose: bool = False) -> None:
    """(Re)configure the root logger.  Repeated calls replace earlier handlers."""
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    handlers = [_terminal_handler(verbose)]
    if output_dir is not None:
        handlers.append(_file_handler(output_dir))

    # Filtering happens per handler
    root.setLevel(logging.DEBUG)
    for handler in handlers:
        root.addHandler(handler)

    for name in _QUIET:
        logging.getLogger(name).setLevel(logging.WARNING)
