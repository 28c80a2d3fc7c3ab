"""Tests for the process entry point and logging setup.

``uvicorn.run`` is replaced by a recorder so that no socket is bound; the
tests only check what would have been served, or that startup aborted
before the listener was started.
"""

from __future__ import annotations

import io
import logging
import os
import sys

import pytest
from fastapi.testclient import TestClient

from mm_weather import main as main_module
from mm_weather.core import logging_config
from mm_weather.core.settings import ConfigError
from mm_weather.tests.fakes import PARIS_RESPONSE


class StaticProvider:
    async def fetch_weather(self, location):
        return PARIS_RESPONSE


@pytest.fixture
def uvicorn_calls(monkeypatch, tmp_path):
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    monkeypatch.setattr(main_module, "setup_logging", lambda debug=False: None)
    # load_dotenv writes straight into os.environ; give it a copy that is thrown away afterwards
    monkeypatch.setattr(os, "environ", os.environ.copy())
    return calls


@pytest.fixture
def served(uvicorn_calls, monkeypatch):
    monkeypatch.setattr(main_module, "load_dotenv", lambda *args, **kwargs: None)
    return uvicorn_calls


def test_serves_on_resolved_port(served):
    main_module.main(["-token", "k", "-port", "9090"])

    assert len(served) == 1
    app, kwargs = served[0]
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9090
    assert app.state.settings.api_key == "k"

    app.state.weather_provider = StaticProvider()
    client = TestClient(app)
    assert client.get("/weather", params={"text": "Paris"}).json()["text"] == (
        "Current weather in Paris: 21.5°C - Sunny"
    )
    assert client.get("/forecast").status_code == 404


def test_dotenv_in_working_directory(uvicorn_calls, tmp_path):
    (tmp_path / ".env").write_text("WEATHER_API_TOKEN=dotenv-key\nMM_LISTEN_PORT=8282\n", encoding="utf-8")

    main_module.main([])

    app, kwargs = uvicorn_calls[0]
    assert app.state.settings.api_key == "dotenv-key"
    assert kwargs["port"] == 8282


def test_real_environment_wins_over_dotenv(uvicorn_calls, tmp_path):
    (tmp_path / ".env").write_text("WEATHER_API_TOKEN=dotenv-key\n", encoding="utf-8")
    os.environ["WEATHER_API_TOKEN"] = "env-key"

    main_module.main([])

    app, _ = uvicorn_calls[0]
    assert app.state.settings.api_key == "env-key"


def test_key_from_environment(served, monkeypatch):
    monkeypatch.setenv("WEATHER_API_TOKEN", "env-key")
    monkeypatch.setenv("MM_LISTEN_PORT", "8181")

    main_module.main([])

    app, kwargs = served[0]
    assert app.state.settings.api_key == "env-key"
    assert kwargs["port"] == 8181


def test_unreadable_config_stops_before_listening(served, tmp_path):
    (tmp_path / "config.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(ConfigError):
        main_module.main([])

    assert served == []


def test_no_api_key_exits_2_before_listening(served, tmp_path):
    (tmp_path / "config.json").write_text('{"listenPort": "9000"}', encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main_module.main([])

    assert exc_info.value.code == 2
    assert served == []


def test_non_numeric_port_is_fatal(served):
    with pytest.raises(ValueError):
        main_module.main(["-token", "k", "-port", "http"])
    assert served == []


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    logging_config._installed.clear()
    root.setLevel(level)


def test_logging_splits_stdout_and_stderr(restore_root_logger, monkeypatch):
    out, err = io.StringIO(), io.StringIO()
    monkeypatch.setattr(sys, "stdout", out)
    monkeypatch.setattr(sys, "stderr", err)

    logging_config.setup_logging(debug=False)
    log = logging.getLogger("mm_weather.test")
    log.debug("hidden detail")
    log.info("Starting server on port 8080")
    log.error("Failed to locate API key!")

    assert "[INFO] Starting server on port 8080" in out.getvalue()
    assert "Failed to locate API key!" not in out.getvalue()
    assert "[ERROR] Failed to locate API key!" in err.getvalue()
    assert "hidden detail" not in out.getvalue() + err.getvalue()


def test_debug_logging_and_reconfiguration(restore_root_logger, monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdout", out)

    logging_config.setup_logging(debug=False)
    logging_config.setup_logging(debug=True)
    logging.getLogger("mm_weather.test").debug("Text: Paris")

    assert restore_root_logger.level == logging.DEBUG
    assert len(logging_config._installed) == 2
    assert out.getvalue().count("[DEBUG] Text: Paris") == 1
    assert logging.getLogger("httpx").level == logging.WARNING
