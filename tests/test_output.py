import pytest

from jatools.errors import ToolError
from jatools.exit_codes import JadeExit
from jatools.output import report_error, report_info, run_command


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr("jatools.output.setup_logging", lambda: None)


def test_report_error_prints_code_and_exits(capsys):
    with pytest.raises(SystemExit) as ei:
        report_error(7, "Editor not found: 'nano'")
    assert ei.value.code == 7
    assert capsys.readouterr().err == "error[7]: Editor not found: 'nano'\n"


def test_report_info_goes_to_stdout(capsys):
    report_info("Downloaded: /tmp/x")
    out = capsys.readouterr()
    assert out.out == "Downloaded: /tmp/x\n"
    assert out.err == ""


def test_run_command_maps_tool_error_to_exit_code(capsys):
    def boom(argv):
        raise ToolError(JadeExit.DOWN_FAILED, "Remote docker compose down failed")

    with pytest.raises(SystemExit) as ei:
        run_command(boom, [])
    assert ei.value.code == 9
    assert "error[9]: Remote docker compose down failed" in capsys.readouterr().err


def test_run_command_success_returns_zero():
    seen = []
    assert run_command(seen.append, ["-d"]) == 0
    assert seen == [["-d"]]
