"""Tests for the server entrypoint."""

import pytest

from photoboard import main as main_module


def test_main_runs_uvicorn_with_configured_address(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[tuple[object, str, int]] = []

    def fake_run(app: object, host: str, port: int) -> None:
        calls.append((app, host, port))

    monkeypatch.setenv("ADMIN_PASSWORD", "secret")
    monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert len(calls) == 1
    _, host, port = calls[0]
    assert host == "0.0.0.0"
    assert port == 8123
