# jatools/components/sync.py
from __future__ import annotations

import logging
import os
import shlex
import shutil
import stat
import tempfile
from enum import IntEnum
from pathlib import Path
from typing import Type

from ..config import Settings
from ..errors import ToolError
from ..exit_codes import JadeExit
from ..local import Runner, Which, run_local
from ..output import report_info
from ..remote.commands import Transport, compose, remote_backup

log = logging.getLogger(__name__)


def _target_mode(dest: Path) -> int:
    """Permission bits the downloaded file should end up with."""
    try:
        return stat.S_IMODE(dest.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def download_file(settings: Settings, transport: Transport, codes: Type[IntEnum] = JadeExit) -> Path:
    """
    Fetch the remote file into a temp file beside ``local_path`` and rename
    it into place, so a failed download leaves the local file untouched.
    An existing file keeps its permissions; a new one gets the umask default.
    """
    dest = Path(settings.local_path)
    try:
        fd, tmp_name = tempfile.mkstemp(dir=str(dest.parent), prefix=f".{dest.name}.", suffix=".part")
    except OSError as e:
        raise ToolError(codes.DOWNLOAD_FAILED, f"Download failed: {e}")
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        res = transport.download(settings.remote_path, tmp)
        if not res.ok:
            log.debug("download rc=%d: %s", res.rc, res.err.strip())
            raise ToolError(codes.DOWNLOAD_FAILED, "Download failed")
        try:
            os.chmod(tmp, _target_mode(dest))
            os.replace(tmp, dest)
        except OSError as e:
            raise ToolError(codes.DOWNLOAD_FAILED, f"Download failed: cannot write {dest}: {e}")
    finally:
        if tmp.exists():
            tmp.unlink()
    report_info(f"Downloaded: {dest}")
    return dest


def upload_file(
    settings: Settings,
    transport: Transport,
    *,
    backup: bool = True,
    codes: Type[IntEnum] = JadeExit,
) -> None:
    local = Path(settings.local_path)
    if not local.is_file():
        raise ToolError(codes.LOCAL_MISSING, f"Local file missing: {local}")

    if backup:
        res = transport.run(remote_backup(settings.remote_path))
        if not res.ok:
            raise ToolError(codes.BACKUP_FAILED, "Failed to create remote backup")

    res = transport.upload(local, settings.remote_path)
    if not res.ok:
        log.debug("upload rc=%d: %s", res.rc, res.err.strip())
        raise ToolError(codes.UPLOAD_FAILED, "Upload failed")
    report_info(f"Uploaded: {local}")
    if backup:
        report_info(f"Remote file backed up to: {settings.remote_path}.bak")


def edit_file(
    settings: Settings,
    transport: Transport,
    *,
    codes: Type[IntEnum] = JadeExit,
    runner: Runner = run_local,
    which: Which = shutil.which,
) -> None:
    """Download the file, then open it in the configured editor and wait for it."""
    path = download_file(settings, transport, codes=codes)

    try:
        argv = shlex.split(settings.editor or "")
    except ValueError as e:
        raise ToolError(codes.EDITOR_NOT_FOUND, f"Editor not found: '{settings.editor}' ({e})")
    if not argv or not which(argv[0]):
        raise ToolError(codes.EDITOR_NOT_FOUND, f"Editor not found: '{settings.editor}'")
    res = runner([*argv, str(path)])
    if not res.ok:
        raise ToolError(codes.EDITOR_FAILED, f"Editor exited with status {res.rc}")


def upload_compose(settings: Settings, transport: Transport) -> None:
    upload_file(settings, transport)
    if not transport.run(compose(settings.remote_path, "up", "-d")).ok:
        raise ToolError(JadeExit.UP_FAILED, "Remote docker compose up failed")
    report_info("Remote docker compose up -d completed")


def upload_restart(settings: Settings, transport: Transport) -> None:
    """
    down -> upload -> up -d, strictly in order. There is no rollback: if a
    later step fails the stack stays down for the operator to fix.
    """
    if not transport.run(compose(settings.remote_path, "down")).ok:
        raise ToolError(JadeExit.DOWN_FAILED, "Remote docker compose down failed")
    upload_file(settings, transport)
    if not transport.run(compose(settings.remote_path, "up", "-d")).ok:
        raise ToolError(JadeExit.RESTART_UP_FAILED, "Remote docker compose up failed during restart")
    report_info("Remote docker compose restart completed")
