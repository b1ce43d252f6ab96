"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from journal_balance.config import (
    DisplaySettings,
    LedgerSettings,
    LoggingSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestLedgerSettings:

    def test_defaults(self, monkeypatch):
        """Non-strict, reject self references, six places."""
        monkeypatch.delenv("LEDGER_STRICT_CLASSIFICATION", raising=False)
        settings = LedgerSettings()
        assert settings.self_reference_policy == "reject"
        assert settings.max_decimal_places == 6

    def test_strict_from_environment(self, monkeypatch):
        """LEDGER_STRICT_CLASSIFICATION turns strict mode on."""
        monkeypatch.setenv("LEDGER_STRICT_CLASSIFICATION", "true")
        assert LedgerSettings().strict_classification is True
        assert get_settings().ledger.strict_classification is True

    def test_unknown_policy_rejected(self):
        """Only reject and warn are policies."""
        with pytest.raises(ValidationError):
            LedgerSettings(self_reference_policy="ignore")

    def test_precision_floor(self):
        """Exact sums never get fewer than 28 digits."""
        with pytest.raises(ValidationError):
            LedgerSettings(decimal_precision=10)


class TestDisplaySettings:

    def test_rupiah_defaults(self, monkeypatch):
        for name in ("CURRENCY_SYMBOL", "THOUSANDS_SEPARATOR", "DECIMAL_SEPARATOR", "DECIMAL_PLACES"):
            monkeypatch.delenv(f"DISPLAY_{name}", raising=False)
        display = DisplaySettings()
        assert display.currency_symbol == "Rp"
        assert display.thousands_separator == "."
        assert display.decimal_places == 0

    def test_separator_is_one_character(self):
        with pytest.raises(ValidationError):
            DisplaySettings(decimal_separator="..")


class TestLoggingSettings:

    def test_level_is_normalized(self):
        """Level names are case-insensitive."""
        assert LoggingSettings(level=" debug ").level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="verbose")


class TestSettingsAccess:

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        """A bad group is reported without hiding the others."""
        monkeypatch.setenv("LOG_LEVEL", "loud")
        results = validate_all_settings()
        assert results["ledger"] is True
        assert results["display"] is True
        assert results["logging"] is False
        assert "Unknown log level" in results["logging_error"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
