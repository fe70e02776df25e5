# jatools/components/updater.py
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from typing import List

from ..errors import ToolError
from ..exit_codes import JauExit
from ..local import Runner, Which, require_tool, run_local
from ..output import report_info

log = logging.getLogger(__name__)

# dnf check-update: 0 = nothing pending, 100 = updates available, anything else = error
CHECK_UPDATE_NONE = 0
CHECK_UPDATE_AVAILABLE = 100


@dataclass
class Updater:
    """Fedora update pipeline. Every step is gated on the one before it."""

    runner: Runner = run_local
    which: Which = shutil.which

    def _sudo(self, *argv: str, code: JauExit, message: str) -> None:
        res = self.runner(["sudo", *argv])
        if not res.ok:
            raise ToolError(code, message)

    def setup(self) -> None:
        require_tool("sudo", JauExit.SUDO_NOT_FOUND, self.which, "sudo not found")
        require_tool("dnf", JauExit.DNF_NOT_FOUND, self.which, "dnf not found (script requires a DNF-based system)")

    def install_if_missing(self, pkg: str) -> None:
        if self.which(pkg):
            report_info(f"Dependency satisfied: {pkg}")
            return
        report_info(f"Installing missing dependency: {pkg}")
        self._sudo("dnf", "install", "-y", pkg, code=JauExit.INSTALL_FAILED, message=f"Failed to install {pkg}")

    def run_dnf_update(self) -> None:
        report_info("Refreshing DNF cache...")
        self._sudo("dnf", "-y", "makecache", "--refresh", code=JauExit.MAKECACHE_FAILED, message="Failed to refresh DNF cache")
        report_info("Updating all packages...")
        self._sudo("dnf", "-y", "update", code=JauExit.UPDATE_FAILED, message="DNF update failed")

    def handle_rpmconf(self) -> None:
        if not self.which("rpmconf"):
            report_info("rpmconf not available; skipping config file handling")
            return
        report_info("Handling leftover RPM configuration files...")
        self._sudo("rpmconf", "-a", code=JauExit.RPMCONF_FAILED, message="rpmconf execution failed")

    def install_security_updates(self) -> None:
        report_info("Checking for security updates...")
        res = self.runner(["sudo", "dnf", "check-update", "--security"], capture=True)
        if res.rc == CHECK_UPDATE_NONE:
            report_info("No security updates available.")
            return
        if res.rc != CHECK_UPDATE_AVAILABLE:
            log.debug("check-update stderr: %s", res.err.strip())
            raise ToolError(JauExit.SECURITY_CHECK_FAILED, f"Security update check failed (rc={res.rc})")
        report_info("Installing security updates...")
        self._sudo("dnf", "-y", "update", "--security", code=JauExit.SECURITY_UPDATE_FAILED, message="Security update failed")

    def cleanup_packages(self) -> None:
        report_info("Removing unused dependencies...")
        self._sudo("dnf", "-y", "autoremove", code=JauExit.AUTOREMOVE_FAILED, message="DNF autoremove failed")
        report_info("Cleaning cached package data...")
        self._sudo("dnf", "clean", "all", code=JauExit.CLEAN_FAILED, message="DNF clean failed")

    def update_flatpak(self) -> None:
        if not self.which("flatpak"):
            report_info("Flatpak not installed; skipping Flatpak updates")
            return
        report_info("Updating Flatpak applications...")
        if not self.runner(["flatpak", "update", "-y"]).ok:
            raise ToolError(JauExit.FLATPAK_UPDATE_FAILED, "Flatpak update failed")
        report_info("Removing unused Flatpak runtimes...")
        if not self.runner(["flatpak", "uninstall", "--unused", "-y"]).ok:
            raise ToolError(JauExit.FLATPAK_CLEANUP_FAILED, "Flatpak cleanup failed")

    def steps(self) -> List:
        return [
            self.setup,
            lambda: report_info("Starting system updates..."),
            lambda: self.install_if_missing("rpmconf"),
            lambda: self.install_if_missing("flatpak"),
            self.run_dnf_update,
            self.handle_rpmconf,
            self.install_security_updates,
            self.cleanup_packages,
            self.update_flatpak,
        ]

    def run(self) -> None:
        for step in self.steps():
            step()
        report_info("System updates completed successfully.")
