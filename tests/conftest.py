from pathlib import Path
from typing import Dict, List, Optional

import pytest

from jatools.local import Result


class FakeTransport:
    """Records every remote call; run() rc is chosen by substring match."""

    name = "fake"
    copy_tool: Optional[str] = "scp"
    shell_tool: Optional[str] = "ssh"

    def __init__(self, content: str = "services: {}\n", download_rc: int = 0, upload_rc: int = 0,
                 run_rcs: Optional[Dict[str, int]] = None):
        self.content = content
        self.download_rc = download_rc
        self.upload_rc = upload_rc
        self.run_rcs = run_rcs or {}
        self.calls: List[tuple] = []

    def download(self, remote_path, local_path):
        self.calls.append(("download", remote_path))
        if self.download_rc == 0:
            Path(local_path).write_text(self.content)
        return Result(self.download_rc)

    def upload(self, local_path, remote_path):
        self.calls.append(("upload", str(local_path), remote_path))
        return Result(self.upload_rc)

    def run(self, command):
        self.calls.append(("run", command))
        for needle, rc in self.run_rcs.items():
            if needle in command:
                return Result(rc)
        return Result(0)

    def kinds(self):
        return [c[0] for c in self.calls]


class FakeRunner:
    """Stands in for run_local: records argv, answers with scripted rcs."""

    def __init__(self, rcs: Optional[Dict[str, int]] = None):
        self.rcs = rcs or {}
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []

    def __call__(self, argv, *, input=None, capture=False):
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input)
        line = " ".join(argv)
        for needle, rc in self.rcs.items():
            if needle in line:
                return Result(rc)
        return Result(0)

    def lines(self):
        return [" ".join(c) for c in self.calls]


def which_of(*present):
    def which(name):
        return f"/usr/bin/{name}" if name in present else None
    return which


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def settings(tmp_path):
    from jatools.config import Settings

    return Settings(
        remote_host="root@box",
        remote_path="/srv/app/compose.yml",
        local_path=tmp_path / "compose.yml",
        editor="nano",
    )
