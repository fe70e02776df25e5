import pytest

from conftest import FakeRunner, which_of
from jatools.components.updater import Updater
from jatools.errors import ToolError
from jatools.exit_codes import JauExit

ALL = ("sudo", "dnf", "rpmconf", "flatpak")


def pipeline(rcs=None, present=ALL):
    runner = FakeRunner(rcs or {"check-update": 100})
    return Updater(runner=runner, which=which_of(*present)), runner


def test_full_pipeline_order(capsys):
    up, runner = pipeline()
    up.run()
    assert runner.lines() == [
        "sudo dnf -y makecache --refresh",
        "sudo dnf -y update",
        "sudo rpmconf -a",
        "sudo dnf check-update --security",
        "sudo dnf -y update --security",
        "sudo dnf -y autoremove",
        "sudo dnf clean all",
        "flatpak update -y",
        "flatpak uninstall --unused -y",
    ]
    out = capsys.readouterr().out
    assert out.startswith("Starting system updates...\nDependency satisfied: rpmconf\n")
    assert out.endswith("System updates completed successfully.\n")


def test_missing_optional_tools_are_installed_and_skipped():
    up, runner = pipeline(present=("sudo", "dnf"))
    up.run()
    lines = runner.lines()
    assert lines[:2] == ["sudo dnf install -y rpmconf", "sudo dnf install -y flatpak"]
    assert not any("rpmconf -a" in l for l in lines)
    assert not any(l.startswith("flatpak") for l in lines)


def test_no_security_updates_is_not_an_error(capsys):
    up, runner = pipeline(rcs={"check-update": 0})
    up.run()
    assert "sudo dnf -y update --security" not in runner.lines()
    assert "No security updates available." in capsys.readouterr().out


def test_security_check_failure_aborts():
    up, runner = pipeline(rcs={"check-update": 1})
    with pytest.raises(ToolError) as ei:
        up.run()
    assert ei.value.code == JauExit.SECURITY_CHECK_FAILED
    assert runner.lines()[-1] == "sudo dnf check-update --security"


@pytest.mark.parametrize(
    "needle,code",
    [
        ("makecache", JauExit.MAKECACHE_FAILED),
        ("dnf -y update --security", JauExit.SECURITY_UPDATE_FAILED),
        ("autoremove", JauExit.AUTOREMOVE_FAILED),
        ("clean all", JauExit.CLEAN_FAILED),
        ("rpmconf -a", JauExit.RPMCONF_FAILED),
        ("flatpak update", JauExit.FLATPAK_UPDATE_FAILED),
        ("uninstall --unused", JauExit.FLATPAK_CLEANUP_FAILED),
    ],
)
def test_hard_failure_stops_pipeline(needle, code):
    up, runner = pipeline(rcs={"check-update": 100, needle: 1})
    with pytest.raises(ToolError) as ei:
        up.run()
    assert ei.value.code == code
    assert needle in runner.lines()[-1]


def test_install_failure():
    up, runner = pipeline(rcs={"install -y rpmconf": 1}, present=("sudo", "dnf"))
    with pytest.raises(ToolError) as ei:
        up.run()
    assert ei.value.code == JauExit.INSTALL_FAILED
    assert len(runner.calls) == 1


@pytest.mark.parametrize("present,code", [(("dnf",), JauExit.SUDO_NOT_FOUND), (("sudo",), JauExit.DNF_NOT_FOUND)])
def test_preconditions(present, code):
    up, runner = pipeline(present=present)
    with pytest.raises(ToolError) as ei:
        up.run()
    assert ei.value.code == code
    assert runner.calls == []
