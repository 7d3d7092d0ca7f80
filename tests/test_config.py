import pytest

from app.core import config
from app.core.config import ConfigurationError, Settings, resolve_site_url


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("SITE_URL", "CLIENT_URL", "SITEMAP_CACHE_TTL_MS", "HEALTH_INTERVAL_MS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env):
    settings = Settings()
    assert settings.SITEMAP_CACHE_TTL_MS == 3_600_000
    assert settings.HEALTH_INTERVAL_MS == 100_000
    assert settings.HEALTH_TIMEOUT_MS == 20_000
    assert settings.CLEANUP_INTERVAL_HOURS == 12
    assert resolve_site_url(settings) == "http://localhost:5173"


def test_ttl_read_from_environment(clean_env):
    clean_env.setenv("SITEMAP_CACHE_TTL_MS", "1500")
    assert Settings().SITEMAP_CACHE_TTL_MS == 1500


@pytest.mark.parametrize("raw", ["soon", "", "-10"])
def test_malformed_ttl_falls_back_to_default(clean_env, raw):
    clean_env.setenv("SITEMAP_CACHE_TTL_MS", raw)
    assert Settings().SITEMAP_CACHE_TTL_MS == config.DEFAULT_SITEMAP_CACHE_TTL_MS


def test_site_url_takes_precedence_over_client_url(clean_env):
    clean_env.setenv("SITE_URL", "https://shop.example.com")
    clean_env.setenv("CLIENT_URL", "https://admin.example.com,https://shop.example.com")
    assert resolve_site_url(Settings()) == "https://shop.example.com"


def test_client_url_used_when_site_url_blank(clean_env):
    clean_env.setenv("SITE_URL", "  ")
    clean_env.setenv("CLIENT_URL", " https://shop.example.com ")
    assert resolve_site_url(Settings()) == "https://shop.example.com"


def test_multiple_client_urls_are_a_configuration_error(clean_env):
    clean_env.setenv("CLIENT_URL", "https://a.example.com, https://b.example.com")
    with pytest.raises(ConfigurationError, match="CLIENT_URL"):
        resolve_site_url(Settings())


def test_trailing_comma_is_not_a_second_url(clean_env):
    clean_env.setenv("SITE_URL", "https://shop.example.com,")
    assert resolve_site_url(Settings()) == "https://shop.example.com"
