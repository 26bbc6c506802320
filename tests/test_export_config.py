"""
Unit tests for the export_config module.
"""

import pytest

from export_config import (
    DEFAULT_REQUEST_TIMEOUT,
    PINGONE_REGION_CODE_ENV,
    REQUEST_TIMEOUT_ENV,
    ConfigurationError,
    get_pingone_api_domain,
    get_request_timeout,
    get_setting,
)


class TestGetSetting:
    """Test cases for get_setting."""

    def test_explicit_value_wins(self, monkeypatch):
        """An explicit value beats the environment."""
        monkeypatch.setenv("PINGCLI_TEST_SETTING", "from-env")
        assert get_setting("explicit", "PINGCLI_TEST_SETTING", default="default") == "explicit"

    def test_environment_beats_default(self, monkeypatch):
        """The environment is used when no value is passed."""
        monkeypatch.setenv("PINGCLI_TEST_SETTING", "from-env")
        assert get_setting(None, "PINGCLI_TEST_SETTING", default="default") == "from-env"

    def test_default(self):
        """The default is the last resort."""
        assert get_setting(None, "PINGCLI_TEST_SETTING", default="default") == "default"

    def test_optional_missing(self):
        """An optional setting with no default resolves to None."""
        assert get_setting(None, "PINGCLI_TEST_SETTING") is None

    def test_required_missing(self):
        """A required setting without any source raises."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_setting(None, "PINGCLI_TEST_SETTING", required=True)

        assert "PINGCLI_TEST_SETTING" in str(exc_info.value)

    def test_empty_environment_value_ignored(self, monkeypatch):
        """An empty environment variable counts as unset."""
        monkeypatch.setenv("PINGCLI_TEST_SETTING", "")
        assert get_setting(None, "PINGCLI_TEST_SETTING", default="default") == "default"


class TestGetRequestTimeout:
    """Test cases for get_request_timeout."""

    def test_default(self):
        """Falls back to the default timeout."""
        assert get_request_timeout() == DEFAULT_REQUEST_TIMEOUT

    def test_explicit(self):
        """An explicit timeout is used."""
        assert get_request_timeout(5) == 5

    def test_from_environment(self, monkeypatch):
        """The timeout can be set through the environment."""
        monkeypatch.setenv(REQUEST_TIMEOUT_ENV, "12")
        assert get_request_timeout() == 12

    @pytest.mark.parametrize("raw", ["abc", "1.5", "0", "-3"])
    def test_invalid(self, monkeypatch, raw):
        """Non-integer and non-positive timeouts are rejected."""
        monkeypatch.setenv(REQUEST_TIMEOUT_ENV, raw)

        with pytest.raises(ConfigurationError):
            get_request_timeout()


class TestGetPingOneApiDomain:
    """Test cases for get_pingone_api_domain."""

    @pytest.mark.parametrize("region,expected", [
        ("NA", "com"),
        ("EU", "eu"),
        ("AP", "asia"),
        ("AU", "com.au"),
        ("CA", "ca"),
        ("SG", "sg"),
        ("eu", "eu"),
        (" na ", "com"),
    ])
    def test_known_regions(self, region, expected):
        """Region codes map to API domains, case-insensitively."""
        assert get_pingone_api_domain(region) == expected

    def test_from_environment(self, monkeypatch):
        """The region code can come from the environment."""
        monkeypatch.setenv(PINGONE_REGION_CODE_ENV, "CA")
        assert get_pingone_api_domain(None) == "ca"

    def test_unknown_region(self):
        """Unknown region codes are a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_pingone_api_domain("MARS")

        assert "MARS" in str(exc_info.value)

    def test_missing_region(self):
        """The region code is required."""
        with pytest.raises(ConfigurationError):
            get_pingone_api_domain(None)
