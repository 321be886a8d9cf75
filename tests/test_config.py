"""Tests for application settings."""

import pytest

from watchconsole.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WATCHCONSOLE_BACKEND_URL", raising=False)
        monkeypatch.delenv("WATCHCONSOLE_ENRICHMENT_CONCURRENCY", raising=False)

        settings = Settings(_env_file=None)

        assert settings.backend_url == "http://localhost:3000"
        assert settings.enrichment_concurrency == 8

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings use the WATCHCONSOLE_ prefix."""
        monkeypatch.setenv("WATCHCONSOLE_BACKEND_URL", "https://api.example.com")
        monkeypatch.setenv("WATCHCONSOLE_ADMIN_USERNAME", "Root")

        settings = Settings(_env_file=None)

        assert settings.backend_url == "https://api.example.com"
        assert settings.admin_username == "Root"
