"""Tests for notes_client.config."""

from __future__ import annotations

import pytest

from notes_client.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        for name in ("NOTES_API_URL", "ENABLE_SEARCH", "ENABLE_SORT", "REQUEST_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        s = Settings()

        assert s.notes_api_url == "http://localhost:3000"
        assert s.request_timeout == 10.0
        assert s.enable_search is True
        assert s.enable_sort is True
        assert "{title}" in s.reminder_body

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("NOTES_API_URL", "https://notes.example.com")
        monkeypatch.setenv("ENABLE_SEARCH", "false")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")

        s = Settings()

        assert s.notes_api_url == "https://notes.example.com"
        assert s.enable_search is False
        assert s.request_timeout == 2.5

    def test_env_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("NOTES_API_URL", raising=False)
        (tmp_path / ".env").write_text("NOTES_API_URL=http://from-env-file:9000\n", encoding="utf-8")

        assert Settings().notes_api_url == "http://from-env-file:9000"
