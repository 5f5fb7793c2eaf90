from __future__ import annotations

import main
from backend.utils.config import get_settings


def test_launcher_runs_single_process_without_reloader(monkeypatch):
    calls = []
    monkeypatch.setattr("main.uvicorn.run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    try:
        main.main()
    finally:
        get_settings.cache_clear()

    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == ("app:app",)
    assert kwargs["host"] == main.HOST
    assert kwargs["port"] == main.PORT
    assert kwargs["workers"] == 1
    assert kwargs["reload"] is False
    assert kwargs["log_level"] == "warning"
