from __future__ import annotations

import pytest

from confdoc.settings import Settings, get_settings


def test_defaults():
    assert get_settings() == Settings(indent=2, encoding="utf-8")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CONFDOC_INDENT", " 4 ")
    monkeypatch.setenv("CONFDOC_ENCODING", "utf-16")
    assert get_settings() == Settings(indent=4, encoding="utf-16")


def test_blank_env_uses_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CONFDOC_INDENT", "")
    monkeypatch.setenv("CONFDOC_ENCODING", "  ")
    assert get_settings() == Settings()


def test_bad_indent(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CONFDOC_INDENT", "wide")
    with pytest.raises(ValueError):
        get_settings()
