# jatools/components/mount.py
from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import ToolError
from ..exit_codes import JarmExit
from ..output import report_info

log = logging.getLogger(__name__)

RCLONE = "/usr/bin/rclone"


@dataclass(frozen=True)
class MountSpec:
    remote: str
    mount_point: Path

    @property
    def name(self) -> str:
        return self.remote.rstrip(":").split("_")[-1] or self.remote


DEFAULT_MOUNTS = (
    MountSpec("koofr:", Path.home() / "dao" / "storage" / "koofr"),
    MountSpec("koofr_vault:", Path.home() / "dao" / "storage" / "vault"),
)


@dataclass
class MountTask:
    """
    Handle on a detached ``rclone mount``. Nothing joins it by default;
    the process keeps running after jarm exits.
    """

    spec: MountSpec
    proc: subprocess.Popen = field(repr=False)

    @property
    def pid(self) -> int:
        return self.proc.pid

    def poll(self) -> Optional[int]:
        return self.proc.poll()

    def join(self, timeout: Optional[float] = None) -> Optional[int]:
        try:
            return self.proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            return None

    def cancel(self) -> None:
        if self.proc.poll() is None:
            log.debug("terminating mount %s (pid %d)", self.spec.remote, self.proc.pid)
            self.proc.terminate()


Spawner = Callable[..., subprocess.Popen]


def launch_mount(spec: MountSpec, *, rclone: str = RCLONE, spawn: Spawner = subprocess.Popen) -> MountTask:
    argv = [rclone, "mount", spec.remote, str(spec.mount_point)]
    log.debug("spawn: %s", shlex.join(argv))
    proc = spawn(argv, stdin=subprocess.DEVNULL, start_new_session=True)
    return MountTask(spec, proc)


def mount_all(
    mounts: Sequence[MountSpec] = DEFAULT_MOUNTS,
    *,
    rclone: str = RCLONE,
    spawn: Spawner = subprocess.Popen,
) -> List[MountTask]:
    """Launch every mount and return their handles without waiting on them."""
    if not Path(rclone).is_file():
        raise ToolError(JarmExit.RCLONE_NOT_FOUND, f"'{rclone}' not found")

    tasks: List[MountTask] = []
    for i, spec in enumerate(mounts):
        report_info(f"Mounting {spec.name}...")
        try:
            tasks.append(launch_mount(spec, rclone=rclone, spawn=spawn))
        except OSError as e:
            log.debug("rclone spawn failed: %s", e)
            raise ToolError(JarmExit.FIRST_MOUNT_FAILED + i, f"Failed to mount {spec.name}.")
    return tasks
