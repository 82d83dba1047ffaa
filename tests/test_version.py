"""Tests for version module"""

import pytest

from dnsboard import version as version_module
from dnsboard.version import DEFAULT_VERSION, get_user_agent, get_version


@pytest.fixture(autouse=True)
def clear_version_cache():
    get_version.cache_clear()
    yield
    get_version.cache_clear()


class TestGetVersion:
    """Tests for get_version function"""

    def test_returns_non_empty_string(self):
        version = get_version()

        assert isinstance(version, str)
        assert len(version) > 0

    def test_env_override(self, monkeypatch):
        """Test the environment variable wins over everything else"""
        monkeypatch.setenv("DNSBOARD_VERSION", " 1.4.2 ")

        assert get_version() == "1.4.2"

    def test_default_version_fallback(self):
        assert DEFAULT_VERSION == "dev"

    def test_version_cached(self, monkeypatch):
        monkeypatch.setenv("DNSBOARD_VERSION", "1.0.0")
        first = get_version()
        monkeypatch.setenv("DNSBOARD_VERSION", "2.0.0")

        assert get_version() == first


class TestVersionSources:
    """Tests for the fallback order below the environment variable"""

    @pytest.fixture(autouse=True)
    def no_env(self, monkeypatch):
        monkeypatch.delenv("DNSBOARD_VERSION", raising=False)

    def test_version_file(self, monkeypatch, tmp_path):
        version_file = tmp_path / "VERSION"
        version_file.write_text("2.3.0\n")
        monkeypatch.setattr(version_module, "VERSION_FILE", version_file)

        assert get_version() == "2.3.0"

    def test_blank_version_file_falls_through(self, monkeypatch, tmp_path):
        """Test an empty VERSION file defers to the installed metadata"""
        version_file = tmp_path / "VERSION"
        version_file.write_text("  \n")
        monkeypatch.setattr(version_module, "VERSION_FILE", version_file)
        monkeypatch.setattr(version_module, "_from_metadata", lambda: "0.1.0")

        assert get_version() == "0.1.0"

    def test_default_when_nothing_found(self, monkeypatch, tmp_path):
        monkeypatch.setattr(version_module, "VERSION_FILE", tmp_path / "missing")
        monkeypatch.setattr(version_module, "_from_metadata", lambda: None)

        assert get_version() == DEFAULT_VERSION

    def test_uninstalled_package(self, monkeypatch):
        def missing(name):
            raise version_module.metadata.PackageNotFoundError(name)

        monkeypatch.setattr(version_module.metadata, "version", missing)

        assert version_module._from_metadata() is None


class TestUserAgent:
    """Tests for the User-Agent header"""

    def test_format(self, monkeypatch):
        monkeypatch.setenv("DNSBOARD_VERSION", "1.4.2")

        assert get_user_agent() == "dnsboard/1.4.2"
