"""
Unit Tests - Configuration
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from shoplab.config import Settings
from shoplab.config.settings import DatabaseSettings, MonitoringSettings, ReportSettings


class TestSettings:
    """Tests for Settings"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = DatabaseSettings()

        assert settings.url == "sqlite+aiosqlite:///./shoplab.db"

    def test_test_settings(self, test_settings):
        assert test_settings.app_env == "testing"
        assert test_settings.debug is True
        assert not test_settings.is_production

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(app_env="moon")

    def test_environment_is_normalized(self):
        assert Settings(app_env="Production").is_production

    def test_report_thresholds_from_env(self, monkeypatch):
        monkeypatch.setenv("REPORT_MIN_PRODUCT_PRICE", "25.50")
        monkeypatch.setenv("REPORT_DELIVERED_STATUS", "Shipped")

        reports = ReportSettings()

        assert reports.min_product_price == Decimal("25.50")
        assert reports.category_sales_threshold == Decimal("100")
        assert reports.delivered_status == "Shipped"

    def test_database_url_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/shop")

        settings = DatabaseSettings()

        assert settings.url == "postgresql+asyncpg://u:p@db/shop"

    def test_invalid_log_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ValidationError):
            MonitoringSettings()

    def test_sections_read_dotenv(self, tmp_path, monkeypatch):
        """Every section picks up its keys from a .env file"""
        for key in ("APP_NAME", "DATABASE_URL", "REPORT_MIN_PRODUCT_PRICE", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        (tmp_path / ".env").write_text(
            "APP_NAME=fromdotenv\n"
            "DATABASE_URL=sqlite+aiosqlite:///./other.db\n"
            "REPORT_MIN_PRODUCT_PRICE=10\n"
            "LOG_LEVEL=DEBUG\n"
        )
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "fromdotenv"
        assert settings.database.url == "sqlite+aiosqlite:///./other.db"
        assert settings.reports.min_product_price == Decimal("10")
        assert settings.monitoring.log_level == "DEBUG"
