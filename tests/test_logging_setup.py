import logging

import pytest

from jatools.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.mark.parametrize("env,level", [("0", logging.WARNING), ("1", logging.INFO), ("3", logging.DEBUG), ("loud", logging.WARNING)])
def test_verbosity_from_environment(monkeypatch, env, level):
    monkeypatch.setenv("JATOOLS_VERBOSITY", env)
    monkeypatch.delenv("JATOOLS_LOG_FILE", raising=False)
    setup_logging()
    assert logging.getLogger().level == level


def test_log_file_handler(tmp_path):
    log_file = tmp_path / "jatools.log"
    setup_logging(verbosity=2, log_file=str(log_file))
    logging.getLogger("jatools.test").debug("hello %s", "file")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "[DEBUG] hello file" in log_file.read_text()
