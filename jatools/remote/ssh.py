# jatools/remote/ssh.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Tuple

import paramiko

from ..local import Result

log = logging.getLogger(__name__)

_SSH_CONFIG = Path("~/.ssh/config").expanduser()


def split_user_host(target: str) -> Tuple[Optional[str], str]:
    user, sep, host = target.rpartition("@")
    return (user or None, host) if sep else (None, target)


def _load_key(key_path: Path) -> paramiko.PKey:
    # try RSA, fallback to Ed25519
    try:
        return paramiko.RSAKey.from_private_key_file(str(key_path))
    except paramiko.SSHException:
        return paramiko.Ed25519Key.from_private_key_file(str(key_path))


@dataclass
class ParamikoTransport:
    host: str
    port: Optional[int] = None
    identity_file: Optional[Path] = None
    timeout: int = 30
    ssh_config: Path = _SSH_CONFIG

    name: ClassVar[str] = "paramiko"
    copy_tool: ClassVar[Optional[str]] = None
    shell_tool: ClassVar[Optional[str]] = None

    def __post_init__(self) -> None:
        self._ssh: paramiko.SSHClient | None = None

    def _connect_kwargs(self) -> dict:
        user, alias = split_user_host(self.host)
        opts: dict = {}
        if self.ssh_config.is_file():
            cfg = paramiko.SSHConfig.from_path(str(self.ssh_config))
            opts = cfg.lookup(alias)
        kwargs = {
            "hostname": opts.get("hostname", alias),
            "port": int(self.port or opts.get("port", 22)),
            "username": user or opts.get("user"),
            "timeout": self.timeout,
            "banner_timeout": self.timeout,
            "auth_timeout": self.timeout,
        }
        if self.identity_file:
            kwargs["pkey"] = _load_key(self.identity_file)
        elif opts.get("identityfile"):
            kwargs["key_filename"] = [str(Path(p).expanduser()) for p in opts["identityfile"]]
        return kwargs

    # Context manager
    def __enter__(self) -> "ParamikoTransport":
        cli = paramiko.SSHClient()
        cli.load_system_host_keys()
        cli.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        cli.connect(**self._connect_kwargs())
        self._ssh = cli
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._ssh is not None:
                self._ssh.close()
        finally:
            self._ssh = None

    def _session(self, op):
        try:
            with self as t:
                assert t._ssh is not None, "SSH not connected"
                return op(t._ssh)
        except (paramiko.SSHException, OSError) as e:
            log.debug("paramiko %s failed: %s", self.host, e)
            return Result(255, "", str(e))

    def download(self, remote_path: str, local_path: Path) -> Result:
        def op(ssh: paramiko.SSHClient) -> Result:
            sftp = ssh.open_sftp()
            try:
                sftp.get(remote_path, str(local_path))
            finally:
                sftp.close()
            return Result(0)

        return self._session(op)

    def upload(self, local_path: Path, remote_path: str) -> Result:
        def op(ssh: paramiko.SSHClient) -> Result:
            sftp = ssh.open_sftp()
            try:
                sftp.put(str(local_path), remote_path)
            finally:
                sftp.close()
            return Result(0)

        return self._session(op)

    def run(self, command: str) -> Result:
        def op(ssh: paramiko.SSHClient) -> Result:
            log.debug("remote %s: %s", self.host, command)
            stdin, stdout, stderr = ssh.exec_command(command, timeout=self.timeout)
            rc = stdout.channel.recv_exit_status()
            out = stdout.read().decode("utf-8", "ignore")
            err = stderr.read().decode("utf-8", "ignore")
            return Result(rc, out, err)

        return self._session(op)
