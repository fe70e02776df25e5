# jatools/remote/commands.py
from __future__ import annotations

import posixpath
import shlex
from typing import Union

from ..config import Settings
from .openssh import OpenSSHTransport
from .ssh import ParamikoTransport

Transport = Union[OpenSSHTransport, ParamikoTransport]


def make_transport(settings: Settings) -> Transport:
    kind = (settings.transport or "openssh").strip().lower()
    if kind == "openssh":
        return OpenSSHTransport(settings.remote_host, port=settings.ssh_port, identity_file=settings.identity_file)
    if kind == "paramiko":
        return ParamikoTransport(settings.remote_host, port=settings.ssh_port, identity_file=settings.identity_file)
    raise ValueError(f"unknown transport {settings.transport!r} (use openssh or paramiko)")


def remote_backup(remote_path: str) -> str:
    # a missing remote file is not an error: there is nothing to back up yet
    q = shlex.quote(remote_path)
    bak = shlex.quote(remote_path + ".bak")
    return f"if [ -f {q} ]; then cp -f {q} {bak}; fi"


def compose(remote_path: str, *args: str) -> str:
    workdir = posixpath.dirname(remote_path) or "."
    return f"cd {shlex.quote(workdir)} && exec docker compose {' '.join(shlex.quote(a) for a in args)}"
