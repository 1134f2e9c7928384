from pathlib import Path

import pytest

from asynclog.config import LoggerConfig, load_config
from asynclog.crash import DEFAULT_CRASH_REPORTER

_VARS = ["ASYNCLOG_DIR", "ASYNCLOG_DEBUG", "ASYNCLOG_FILE_NAME", "ASYNCLOG_CRASH_REPORTER"]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate from the developer's environment and any local `.env` file."""
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("asynclog.config.dotenv.load_dotenv", lambda *a, **kw: False)


def test_load_config_defaults():
    cfg = load_config()
    assert cfg.directory is None
    assert cfg.debug is False
    assert cfg.file_name == "log.txt"
    assert cfg.crash_reporter == DEFAULT_CRASH_REPORTER
    assert cfg.log_path is None


def test_load_config_parses_fields(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("ASYNCLOG_DIR", str(tmp_path))
    monkeypatch.setenv("ASYNCLOG_DEBUG", "yes")
    monkeypatch.setenv("ASYNCLOG_FILE_NAME", "app.log")
    monkeypatch.setenv("ASYNCLOG_CRASH_REPORTER", "reporting.hooks:capture")

    cfg = load_config()
    assert cfg.directory == tmp_path
    assert cfg.debug is True
    assert cfg.log_path == tmp_path / "app.log"
    assert cfg.crash_reporter == "reporting.hooks:capture"


@pytest.mark.parametrize("raw", ["", "none", "OFF"])
def test_crash_reporter_can_be_disabled(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("ASYNCLOG_CRASH_REPORTER", raw)
    assert load_config().crash_reporter is None


def test_invalid_boolean_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ASYNCLOG_DEBUG", "maybe")
    with pytest.raises(ValueError, match="ASYNCLOG_DEBUG"):
        load_config()


def test_malformed_crash_reporter_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ASYNCLOG_CRASH_REPORTER", "sentry_sdk")
    with pytest.raises(ValueError):
        load_config()


@pytest.mark.parametrize("file_name", ["", "logs/log.txt", "../log.txt"])
def test_file_name_must_be_bare(file_name: str):
    with pytest.raises(ValueError):
        LoggerConfig(file_name=file_name)
