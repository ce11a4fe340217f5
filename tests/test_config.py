"""
Tests for configuration loading.
"""

import pytest

from qtest.config import DEFAULT_TIMEOUT, QTestConfig, get_config


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("QTEST_SUBDOMAIN", "QTEST_USERNAME", "QTEST_PASSWORD",
                 "QTEST_HOST", "QTEST_TIMEOUT", "QTEST_VERIFY_SSL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestQTestConfig:
    """Tests for QTestConfig."""
    
    def test_server_url_from_subdomain(self):
        assert QTestConfig(subdomain="acme").server_url == "https://acme.qtestnet.com"
    
    def test_host_override(self):
        config = QTestConfig(subdomain="acme", host="https://qtest.internal/")
        assert config.server_url == "https://qtest.internal"
    
    def test_is_configured(self):
        assert not QTestConfig(subdomain="acme").is_configured()
        assert QTestConfig(subdomain="acme", username="u", password="p").is_configured()
    
    def test_defaults_from_empty_environment(self, clean_env):
        config = get_config()
        assert config.subdomain == ""
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.verify_ssl is True
        assert config.host is None
    
    def test_from_environment(self, clean_env):
        clean_env.setenv("QTEST_SUBDOMAIN", "acme")
        clean_env.setenv("QTEST_USERNAME", "me@example.com")
        clean_env.setenv("QTEST_PASSWORD", "secret")
        clean_env.setenv("QTEST_TIMEOUT", "5")
        clean_env.setenv("QTEST_VERIFY_SSL", "false")
        
        config = QTestConfig.from_env()
        
        assert config.is_configured()
        assert config.timeout == 5
        assert config.verify_ssl is False
