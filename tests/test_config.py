"""Tests for settings and channel mapping."""

from pathlib import Path

import pytest

from leadreports.config import (
    DEFAULT_CORS_ORIGINS,
    Settings,
    table_for_channel,
)


class TestChannelMapping:
    @pytest.mark.parametrize(
        "canal,table",
        [
            ("pymes", "pymes_data"),
            ("digitales", "canales_digitales_data"),
            ("otro", "pymes_data"),
            ("", "pymes_data"),
        ],
    )
    def test_table_for_channel(self, canal, table):
        assert table_for_channel(canal) == table


class TestSettingsFromEnv:
    """Test reading settings from environment variables."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings == Settings()
        assert settings.page_size == 1000
        assert settings.backend_max_rows == 1000
        assert settings.public_tag == "Gobierno"
        assert settings.private_tag == "Privado"
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "LEADREPORTS_DB_PATH": "/tmp/reports.db",
                "LEADREPORTS_PAGE_SIZE": "250",
                "LEADREPORTS_MAX_PAGES": "10",
                "LEADREPORTS_FETCH_WORKERS": "2",
                "LEADREPORTS_PUBLIC_TAG": "Gov",
                "LEADREPORTS_CORS_ORIGINS": "https://a.example, https://b.example",
            }
        )

        assert settings.db_path == Path("/tmp/reports.db")
        assert settings.page_size == 250
        assert settings.max_pages == 10
        assert settings.fetch_workers == 2
        assert settings.public_tag == "Gov"
        assert settings.cors_origins == ("https://a.example", "https://b.example")

    def test_blank_integer_uses_default(self):
        assert Settings.from_env({"LEADREPORTS_PAGE_SIZE": " "}).page_size == 1000

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_integer_raises(self, value):
        with pytest.raises(ValueError):
            Settings.from_env({"LEADREPORTS_MAX_PAGES": value})
