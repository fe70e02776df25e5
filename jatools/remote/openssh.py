# jatools/remote/openssh.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, List, Optional

from ..local import Result, Runner, run_local


@dataclass
class OpenSSHTransport:
    """
    Thin wrapper around the system scp/ssh binaries; picks up the user's
    ~/.ssh/config, agent and host aliases for free.
    """

    host: str
    port: Optional[int] = None
    identity_file: Optional[Path] = None
    runner: Runner = run_local

    name: ClassVar[str] = "openssh"
    copy_tool: ClassVar[Optional[str]] = "scp"
    shell_tool: ClassVar[Optional[str]] = "ssh"

    def _opts(self, port_flag: str) -> List[str]:
        opts: List[str] = []
        if self.port:
            opts += [port_flag, str(int(self.port))]
        if self.identity_file:
            opts += ["-i", str(self.identity_file)]
        return opts

    def download(self, remote_path: str, local_path: Path) -> Result:
        return self.runner(["scp", "-q", *self._opts("-P"), f"{self.host}:{remote_path}", str(local_path)])

    def upload(self, local_path: Path, remote_path: str) -> Result:
        return self.runner(["scp", "-q", *self._opts("-P"), str(local_path), f"{self.host}:{remote_path}"])

    def run(self, command: str) -> Result:
        return self.runner(["ssh", "-q", *self._opts("-p"), self.host, command])
