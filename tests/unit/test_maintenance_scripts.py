from __future__ import annotations

import runpy
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parents[2] / "scripts"

CLEANUP = runpy.run_path(SCRIPTS_DIR / "cleanup_services.py")
LOOKUP = runpy.run_path(SCRIPTS_DIR / "get_client_id.py")
LISTING = runpy.run_path(SCRIPTS_DIR / "list_services.py")


class DummySession:
    def __init__(self) -> None:
        self.close_calls = 0
        self.rollback_calls = 0

    def close(self) -> None:
        self.close_calls += 1

    def rollback(self) -> None:
        self.rollback_calls += 1


def _patch(monkeypatch, module_globals, **overrides):
    for key, value in overrides.items():
        monkeypatch.setitem(module_globals, key, value)


def test_cleanup_prints_deleted_count(monkeypatch, capsys):
    session = DummySession()
    main = CLEANUP["main"]
    _patch(
        monkeypatch,
        main.__globals__,
        SessionLocal=lambda: session,
        cleanup_services=lambda _: 3,
    )

    exit_code = main([])

    assert exit_code == 0
    assert session.close_calls == 1
    assert "Deleted services: 3" in capsys.readouterr().out


def test_cleanup_failure_closes_session_once_and_propagates(monkeypatch, capsys):
    session = DummySession()
    main = CLEANUP["main"]

    def failing(_):
        raise RuntimeError("connection reset")

    _patch(monkeypatch, main.__globals__, SessionLocal=lambda: session, cleanup_services=failing)

    with pytest.raises(RuntimeError):
        main([])

    assert session.close_calls == 1
    assert session.rollback_calls == 1
    captured = capsys.readouterr()
    assert "cleanup_services failed: connection reset" in captured.err
    assert "Deleted services" not in captured.out


def test_lookup_uses_default_email(monkeypatch, capsys):
    session = DummySession()
    main = LOOKUP["main"]
    seen = {}

    def fake_find(sess, email):
        seen["session"] = sess
        seen["email"] = email
        return "client-1"

    _patch(monkeypatch, main.__globals__, SessionLocal=lambda: session, find_client_id=fake_find)

    assert main([]) == 0
    assert seen == {"session": session, "email": "testpmclient@example.com"}
    assert session.close_calls == 1
    assert "Client ID: client-1" in capsys.readouterr().out


def test_lookup_no_match_prints_none(monkeypatch, capsys):
    session = DummySession()
    main = LOOKUP["main"]
    _patch(monkeypatch, main.__globals__, SessionLocal=lambda: session, find_client_id=lambda s, e: None)

    assert main(["--email", "nobody@example.com"]) == 0
    assert session.close_calls == 1
    assert "Client ID: None" in capsys.readouterr().out


def test_lookup_failure_closes_session_once(monkeypatch):
    session = DummySession()
    main = LOOKUP["main"]

    def failing(sess, email):
        raise ValueError("bad query")

    _patch(monkeypatch, main.__globals__, SessionLocal=lambda: session, find_client_id=failing)

    with pytest.raises(ValueError):
        main([])
    assert session.close_calls == 1


def test_list_services_prints_each_row(monkeypatch, capsys):
    session = DummySession()
    main = LISTING["main"]
    _patch(
        monkeypatch,
        main.__globals__,
        SessionLocal=lambda: session,
        list_services=lambda _: [("GST Return", "s1"), ("Audit", "s2")],
    )

    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Services count: 2" in out
    assert "Service: GST Return (s1)" in out
    assert "Service: Audit (s2)" in out
    assert session.close_calls == 1
