# jatools/remote/__init__.py
"""
Remote transports: the system scp/ssh binaries, or Paramiko.
Re-export the public API so editors/type-checkers can resolve symbols.
"""

from .openssh import OpenSSHTransport
from .ssh import ParamikoTransport
from .commands import make_transport, remote_backup, compose

__all__ = [
    "OpenSSHTransport",
    "ParamikoTransport",
    "make_transport",
    "remote_backup",
    "compose",
]
