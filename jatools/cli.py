# jatools/cli.py
from __future__ import annotations

import argparse
import logging
import shutil
from enum import IntEnum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .components.installer import InstallLayout, install_all
from .components.mount import mount_all
from .components.passphrase import japg
from .components.sync import download_file, edit_file, upload_compose, upload_file, upload_restart
from .components.updater import Updater
from .config import DEF_SETTINGS, Settings, jade_config_path, jade_defaults, load_settings
from .errors import ConfigMissing, ToolError
from .exit_codes import InstallExit, JadeExit, JarmExit, JascpExit, JauExit
from .local import Runner, Which, require_tool, run_local
from .output import run_command
from .remote.commands import Transport, make_transport

log = logging.getLogger(__name__)

JASCP_FLAGS: Dict[str, str] = {"-d": "download", "-u": "upload"}
JADE_FLAGS: Dict[str, str] = {"-d": "download", "-u": "upload", "-uc": "up", "-ur": "restart"}

# mode -> (needs copy tool, needs remote shell)
JASCP_NEEDS: Dict[str, Tuple[bool, bool]] = {
    "": (True, False),
    "download": (True, False),
    "upload": (True, False),
}
JADE_NEEDS: Dict[str, Tuple[bool, bool]] = {
    "": (True, False),
    "download": (True, False),
    "upload": (True, True),
    "up": (True, True),
    "restart": (True, True),
}

TransportFactory = Callable[[Settings], Transport]


# ---------------- flag parsing ----------------
def _flag_parser(prog: str, flags: Mapping[str, str]) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, add_help=False)
    for flag, mode in flags.items():
        # repeated mode flags share one dest: the last one wins
        p.add_argument(flag, dest="mode", action="store_const", const=mode)
    return p


def parse_mode(prog: str, flags: Mapping[str, str], argv: List[str], unknown: IntEnum) -> str:
    """Resolve argv to a mode string ('' when no flag was given)."""
    for arg in argv:
        if arg not in flags:
            raise ToolError(unknown, f"Unknown option: {arg} (use {', '.join(flags)})")
    return _flag_parser(prog, flags).parse_args(argv).mode or ""


def reject_args(argv: List[str], unknown: IntEnum) -> None:
    if argv:
        raise ToolError(unknown, f"Unknown option: {argv[0]} (takes no options)")


def check_tools(needs: Mapping[str, Tuple[bool, bool]], mode: str, transport: Transport, codes, which: Which) -> None:
    needs_copy, needs_shell = needs[mode]
    if needs_copy and transport.copy_tool:
        require_tool(transport.copy_tool, codes.SCP_NOT_FOUND, which)
    if needs_shell and transport.shell_tool:
        require_tool(transport.shell_tool, codes.SSH_NOT_FOUND, which)


def _transport(settings: Settings, factory: TransportFactory, code: Optional[IntEnum]) -> Transport:
    try:
        return factory(settings)
    except ValueError as e:
        if code is None:
            raise
        raise ToolError(code, str(e))


# ---------------- commands ----------------
def jascp(
    argv: List[str],
    *,
    settings: Settings = DEF_SETTINGS,
    transport_factory: TransportFactory = make_transport,
    runner: Runner = run_local,
    which: Which = shutil.which,
) -> None:
    """jascp [-d | -u]: download only, upload only, or download then edit."""
    mode = parse_mode("jascp", JASCP_FLAGS, argv, JascpExit.UNKNOWN_OPTION)
    transport = _transport(settings, transport_factory, None)
    check_tools(JASCP_NEEDS, mode, transport, JascpExit, which)

    dispatch = {
        "download": lambda: download_file(settings, transport, codes=JascpExit),
        "upload": lambda: upload_file(settings, transport, backup=False, codes=JascpExit),
        "": lambda: edit_file(settings, transport, codes=JascpExit, runner=runner, which=which),
    }
    dispatch[mode]()


def jade(
    argv: List[str],
    *,
    config_path: Optional[Path] = None,
    transport_factory: TransportFactory = make_transport,
    runner: Runner = run_local,
    which: Which = shutil.which,
) -> None:
    """jade [-d | -u | -uc | -ur]: edit and redeploy a remote docker compose file."""
    path = config_path or jade_config_path()
    try:
        settings = load_settings(path, jade_defaults())
    except ConfigMissing:
        raise ToolError(JadeExit.CONFIG_MISSING, f"unable to source '{path}'")

    mode = parse_mode("jade", JADE_FLAGS, argv, JadeExit.UNKNOWN_OPTION)
    transport = _transport(settings, transport_factory, JadeExit.BAD_TRANSPORT)
    check_tools(JADE_NEEDS, mode, transport, JadeExit, which)
    log.debug("jade mode=%r host=%s transport=%s", mode or "edit", settings.remote_host, transport.name)

    dispatch = {
        "download": lambda: download_file(settings, transport),
        "upload": lambda: upload_file(settings, transport),
        "up": lambda: upload_compose(settings, transport),
        "restart": lambda: upload_restart(settings, transport),
        "": lambda: edit_file(settings, transport, runner=runner, which=which),
    }
    dispatch[mode]()


def jarm(argv: List[str], **kwargs) -> None:
    """jarm: launch the rclone mounts in the background and return."""
    reject_args(argv, JarmExit.UNKNOWN_OPTION)
    tasks = mount_all(**kwargs)
    # fire-and-forget: the mounts outlive this process and are never joined
    log.debug("launched %d mounts: %s", len(tasks), [t.pid for t in tasks])


def jau(argv: List[str], *, runner: Runner = run_local, which: Which = shutil.which) -> None:
    reject_args(argv, JauExit.UNKNOWN_OPTION)
    Updater(runner=runner, which=which).run()


def jainstall(argv: List[str], *, layout: Optional[InstallLayout] = None) -> None:
    reject_args(argv, InstallExit.UNKNOWN_OPTION)
    install_all(layout or InstallLayout(source=Path.cwd()))


# ---------------- entrypoints ----------------
def japg_main(argv: Optional[List[str]] = None) -> int:
    return run_command(japg, argv)


def jascp_main(argv: Optional[List[str]] = None) -> int:
    return run_command(jascp, argv)


def jade_main(argv: Optional[List[str]] = None) -> int:
    return run_command(jade, argv)


def jarm_main(argv: Optional[List[str]] = None) -> int:
    return run_command(jarm, argv)


def jau_main(argv: Optional[List[str]] = None) -> int:
    return run_command(jau, argv)


def jainstall_main(argv: Optional[List[str]] = None) -> int:
    return run_command(jainstall, argv)
