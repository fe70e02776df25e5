# jatools/logging_setup.py
from __future__ import annotations
import logging, os, sys

VERBOSITY_ENV = "JATOOLS_VERBOSITY"
LOG_FILE_ENV = "JATOOLS_LOG_FILE"


def _level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    return logging.INFO if verbosity == 1 else logging.DEBUG


def setup_logging(verbosity: int | None = None, log_file: str | None = None) -> None:
    # stdout belongs to report_info, so diagnostics go to stderr
    if verbosity is None:
        try:
            verbosity = int(os.environ.get(VERBOSITY_ENV, "0"))
        except ValueError:
            verbosity = 0
    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV) or None

    level = _level_for(verbosity)
    fmt = "%(asctime)s [%(levelname)s] %(message)s"
    datefmt = "%H:%M:%S"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            print(f"warning: cannot open log file {log_file}: {e}", file=sys.stderr)

    logging.basicConfig(level=level, format=fmt, datefmt=datefmt, handlers=handlers, force=True)
