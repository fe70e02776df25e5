# jatools/components/passphrase.py
from __future__ import annotations

import logging
import os
import random
import re
import secrets
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import ToolError
from ..exit_codes import JapgExit
from ..local import Runner, Which, require_tool, run_local
from ..output import report_info

log = logging.getLogger(__name__)

WORD_LIST = Path("/usr/share/dict/japg.list")
WORD_LIST_ENV = "JAPG_WORD_LIST"
DEFAULT_WORDS = 5
DEFAULT_DELIM = "-"

_COUNT_RE = re.compile(r"^[1-9][0-9]*$")


def word_list_path() -> Path:
    override = os.environ.get(WORD_LIST_ENV)
    return Path(override).expanduser() if override else WORD_LIST


def parse_word_count(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_WORDS
    if not _COUNT_RE.match(raw):
        raise ToolError(JapgExit.BAD_WORD_COUNT, "num_words must be a positive integer")
    return int(raw)


def read_words(path: Path) -> List[str]:
    """One word per line; blank lines are ignored."""
    if not path.is_file():
        raise ToolError(JapgExit.WORD_LIST_MISSING, f"Word-list not found: {path}")
    with path.open(encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def _capitalize(word: str) -> str:
    # only the first character changes; the rest is kept as-is
    return word[:1].upper() + word[1:]


def generate_passphrase(
    words: Sequence[str],
    count: int,
    delimiter: str = DEFAULT_DELIM,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Sample ``count`` distinct entries, capitalise each, append one random
    digit to one of them and join in sampling order.
    """
    rng = rng or secrets.SystemRandom()
    if count < 1:
        raise ToolError(JapgExit.BAD_WORD_COUNT, "num_words must be a positive integer")
    if count > len(words):
        raise ToolError(
            JapgExit.NOT_ENOUGH_WORDS,
            f"Word-list has {len(words)} words, {count} requested",
        )

    picked = [_capitalize(w) for w in rng.sample(list(words), count)]
    idx = rng.randrange(count)
    picked[idx] += str(rng.randrange(10))
    return delimiter.join(picked)


def copy_to_clipboard(text: str, runner: Runner = run_local) -> None:
    res = runner(["xclip", "-selection", "clipboard"], input=text, capture=True)
    if not res.ok:
        raise ToolError(JapgExit.CLIPBOARD_FAILED, f"xclip failed: {res.err.strip() or res.rc}")


def japg(
    args: Sequence[str],
    *,
    runner: Runner = run_local,
    which: Which = shutil.which,
    rng: Optional[random.Random] = None,
) -> str:
    """japg [word_count] [delimiter]"""
    if len(args) > 2:
        raise ToolError(JapgExit.UNEXPECTED_ARGUMENT, f"Unexpected argument: {args[2]} (usage: japg [word_count] [delimiter])")
    count = parse_word_count(args[0] if args else None)
    delimiter = (args[1] if len(args) > 1 else "") or DEFAULT_DELIM
    path = word_list_path()
    words = read_words(path)
    require_tool("xclip", JapgExit.XCLIP_NOT_FOUND, which, "xclip not found (install xclip)")

    passphrase = generate_passphrase(words, count, delimiter, rng)
    log.debug("sampled %d of %d words from %s", count, len(words), path)
    copy_to_clipboard(passphrase, runner)
    report_info(f"Generated password: {passphrase}")
    report_info("Password copied to clipboard.")
    return passphrase
