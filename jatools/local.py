# jatools/local.py
from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Sequence

from .errors import ToolError

log = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


@dataclass
class Result:
    rc: int
    out: str = ""
    err: str = ""

    @property
    def ok(self) -> bool:
        return self.rc == 0


def run_local(argv: Sequence[str], *, input: Optional[str] = None, capture: bool = False) -> Result:
    """Run one command to completion. Output goes to the terminal unless ``capture``."""
    log.debug("run: %s", shlex.join(argv))
    try:
        proc = subprocess.run(
            list(argv),
            input=input,
            text=True,
            capture_output=capture,
        )
    except OSError as e:
        log.debug("could not start %s: %s", argv[0], e)
        return Result(127, "", str(e))
    return Result(proc.returncode, proc.stdout or "", proc.stderr or "")


Runner = Callable[..., Result]


def require_tool(name: str, code: IntEnum | int, which: Which = shutil.which, message: Optional[str] = None) -> str:
    path = which(name)
    if not path:
        raise ToolError(code, message or f"'{name}' not found")
    return path
