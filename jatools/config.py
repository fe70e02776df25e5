# jatools/config.py
from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional

from .errors import ConfigMissing

log = logging.getLogger(__name__)

JADE_CONFIG = Path("/usr/local/etc/jade/jade.conf")
JADE_CONFIG_ENV = "JADE_CONFIG"


@dataclass(frozen=True)
class Settings:
    remote_host: str = "root@hephaestus"
    remote_path: str = "/home/oc/docker_config/compose.yml"
    local_path: Path = Path("/tmp/compose.yml")
    editor: str = "codium"
    transport: str = "openssh"
    identity_file: Optional[Path] = None
    ssh_port: Optional[int] = None


DEF_SETTINGS = Settings()

# config file key -> Settings field
_KEYS = {
    "REMOTE_HOST": "remote_host",
    "REMOTE_PATH": "remote_path",
    "LOCAL_PATH": "local_path",
    "EDITOR": "editor",
    "TRANSPORT": "transport",
    "IDENTITY_FILE": "identity_file",
    "SSH_PORT": "ssh_port",
}


def parse_assignments(text: str) -> Dict[str, str]:
    """
    Parse shell-style ``KEY=value`` lines. Comments, blank lines, an
    optional ``export`` prefix and shell quoting are understood; anything
    else on a line is skipped with a warning.
    """
    values: Dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = shlex.split(raw, comments=True)
        except ValueError as e:
            log.warning("config line %d skipped: %s", lineno, e)
            continue
        if not tokens:
            continue
        if tokens[0] == "export":
            tokens = tokens[1:]
        if len(tokens) != 1 or "=" not in tokens[0]:
            log.warning("config line %d skipped: not a KEY=value assignment", lineno)
            continue
        key, _, value = tokens[0].partition("=")
        if not key.isidentifier():
            log.warning("config line %d skipped: bad key %r", lineno, key)
            continue
        values[key] = value
    return values


def _local_path(value: str) -> Path:
    return Path(os.path.expanduser(os.path.expandvars(value)))


def _coerce(field: str, value: str):
    if field == "local_path":
        return _local_path(value)
    if field == "identity_file":
        return _local_path(value) if value else None
    if field == "ssh_port":
        return int(value) if value else None
    return value


def load_settings(path: Path, base: Settings = DEF_SETTINGS) -> Settings:
    """Read ``path`` into a new Settings; keys the file leaves out keep ``base`` values."""
    path = Path(path)
    if not path.is_file():
        raise ConfigMissing(f"unable to source '{path}'")

    updates = {}
    for key, value in parse_assignments(path.read_text(encoding="utf-8")).items():
        field = _KEYS.get(key)
        if field is None:
            log.debug("ignoring unknown config key %s", key)
            continue
        try:
            updates[field] = _coerce(field, value)
        except ValueError:
            log.warning("ignoring %s=%r: not a valid value", key, value)
    log.debug("loaded %s: %s", path, sorted(updates))
    return replace(base, **updates)


def jade_config_path() -> Path:
    override = os.environ.get(JADE_CONFIG_ENV)
    return Path(override).expanduser() if override else JADE_CONFIG


def jade_defaults() -> Settings:
    return replace(DEF_SETTINGS, editor=os.environ.get("EDITOR") or "vi")
