# jatools/output.py
from __future__ import annotations

import logging
import sys
from typing import Callable, List, NoReturn, Optional

from .errors import ToolError
from .logging_setup import setup_logging

log = logging.getLogger(__name__)


def report_error(code: int, message: str) -> NoReturn:
    """Print ``error[<code>]: <message>`` to stderr and exit with ``code``."""
    sys.stderr.write(f"error[{int(code)}]: {message}\n")
    sys.stderr.flush()
    raise SystemExit(int(code))


def report_info(message: str) -> None:
    sys.stdout.write(f"{message}\n")
    sys.stdout.flush()


def run_command(func: Callable[[List[str]], None], argv: Optional[List[str]] = None) -> int:
    """
    Outermost boundary shared by every entry point:
      - configures logging once
      - runs the command
      - turns a ToolError into its process exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    try:
        func(list(argv))
    except ToolError as e:
        log.debug("%s failed with code %d", getattr(func, "__name__", "command"), int(e.code))
        report_error(e.code, e.message)
    except KeyboardInterrupt:
        sys.stderr.write("\ninterrupted\n")
        return 130
    return 0
