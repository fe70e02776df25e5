# jatools/components/installer.py
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..errors import ToolError
from ..exit_codes import InstallExit
from ..output import report_info

log = logging.getLogger(__name__)

TOOLS = ("japg", "jade", "jascp", "jau", "jarm")


@dataclass(frozen=True)
class InstallLayout:
    source: Path = Path(".")
    install_dir: Path = Path("/usr/local/bin")
    dict_dir: Path = Path("/usr/share/dict")
    jade_config_dir: Path = Path("/usr/local/etc/jade")

    @property
    def scripts_dir(self) -> Path:
        return self.source / "scripts"

    @property
    def config_dir(self) -> Path:
        return self.source / "config"

    @property
    def words_dir(self) -> Path:
        return self.source / "dict"


def setup(layout: InstallLayout) -> None:
    try:
        layout.install_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ToolError(InstallExit.INSTALL_DIR_FAILED, f"Failed to create installation directory {layout.install_dir}: {e}")
    if not layout.scripts_dir.is_dir():
        raise ToolError(InstallExit.SCRIPTS_DIR_MISSING, f"Scripts directory not found: {layout.scripts_dir}")
    if not layout.config_dir.is_dir():
        raise ToolError(InstallExit.CONFIG_DIR_MISSING, f"Config directory not found: {layout.config_dir}")
    if not layout.words_dir.is_dir():
        raise ToolError(InstallExit.DICT_DIR_MISSING, f"Dict directory not found: {layout.words_dir}")


def _install_word_list(layout: InstallLayout) -> None:
    src = layout.words_dir / "japg.list"
    if not src.is_file():
        report_info(f"\t[warn]: Dict file not found at '{src}', skipping installation of {layout.dict_dir / src.name}")
        return
    dest = layout.dict_dir / src.name
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise ToolError(InstallExit.WORD_LIST_COPY_FAILED, f"Copy failed for {src.name}: {e}")
    report_info(f"\t[info]: Installed {dest}")


def _install_jade_config(layout: InstallLayout) -> None:
    src = layout.config_dir / "jade.conf"
    dest = layout.jade_config_dir / "jade.conf"
    if not src.is_file():
        raise ToolError(InstallExit.TEMPLATE_MISSING, f"Config template not found: '{src}'")
    if dest.exists():
        # never clobber operator edits
        report_info(f"\t[info]: {dest} already exists, not overwriting.")
        return
    try:
        layout.jade_config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ToolError(InstallExit.CONFIG_DIR_FAILED, f"Failed to create jade config directory: {e}")
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise ToolError(InstallExit.CONFIG_COPY_FAILED, f"Failed to copy config for jade: {e}")
    report_info(f"\tInstalled: {dest} - manually set variables within this file.")


def install_tool(layout: InstallLayout, tool: str) -> Path:
    src = layout.scripts_dir / tool
    if not src.is_file():
        raise ToolError(InstallExit.SOURCE_MISSING, f"Source file not found: {tool}")
    dest = layout.install_dir / tool
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise ToolError(InstallExit.COPY_FAILED, f"Copy failed for {tool}: {e}")
    try:
        os.chmod(dest, 0o755)
    except OSError as e:
        raise ToolError(InstallExit.CHMOD_FAILED, f"chmod failed for {tool}: {e}")
    report_info(f"Installed: {dest}")

    if tool == "japg":
        _install_word_list(layout)
    elif tool == "jade":
        _install_jade_config(layout)
    else:
        report_info(f"\t[info]: No specific install steps for {tool}")
    return dest


def install_all(layout: InstallLayout = InstallLayout(), tools: Sequence[str] = TOOLS) -> None:
    setup(layout)
    for tool in tools:
        install_tool(layout, tool)
    log.debug("installed %d tools into %s", len(tools), layout.install_dir)
    report_info("All tools installed successfully.")
