import pytest

from app.core.config import ConfigurationError, Settings
from app.services.sitemap_builder import CatalogItem
from app.services.sitemap_cache import (
    SitemapCacheEntry,
    SitemapConfig,
    SitemapGenerationError,
    SitemapService,
)


def _service(catalog, clock=None, ttl_ms=1000):
    return SitemapService(SitemapConfig("https://shop.example.com", ttl_ms), catalog, clock=clock)


def test_cache_hit_within_ttl_and_rebuild_after(fake_catalog):
    service = _service(fake_catalog)

    first = service.serve(now=0)
    assert fake_catalog.calls == 1

    second = service.serve(now=500)
    assert fake_catalog.calls == 1
    assert second is first

    service.serve(now=1500)
    assert fake_catalog.calls == 2
    assert service.entry.built_at == 1500


def test_entry_expires_exactly_at_ttl(fake_catalog):
    service = _service(fake_catalog)
    service.serve(now=0)

    assert service.is_fresh(999)
    assert not service.is_fresh(1000)
    service.serve(now=1000)
    assert fake_catalog.calls == 2


def test_rebuild_picks_up_new_products(fake_catalog):
    service = _service(fake_catalog)
    assert "/product/" not in service.serve(now=0)

    fake_catalog.items.append(CatalogItem(id=1, slug="new-arrival"))
    assert "/product/" not in service.serve(now=10)
    assert "/product/new-arrival" in service.serve(now=2000)


def test_uses_injected_clock_by_default(fake_catalog, fake_clock):
    service = _service(fake_catalog, clock=fake_clock)

    service.serve()
    fake_clock.now = 400
    service.serve()
    assert fake_catalog.calls == 1

    fake_clock.now = 1400
    service.serve()
    assert fake_catalog.calls == 2


def test_catalog_failure_leaves_cache_untouched(fake_catalog):
    service = _service(fake_catalog)
    document = service.serve(now=0)
    entry = service.entry

    fake_catalog.error = ConnectionError("database unreachable")
    with pytest.raises(SitemapGenerationError, match="database unreachable"):
        service.serve(now=5000)

    # no stale fallback, but the old entry is not replaced either
    assert service.entry is entry
    assert service.entry.document == document


def test_failure_on_empty_cache_stores_nothing(fake_catalog):
    fake_catalog.error = RuntimeError("boom")
    service = _service(fake_catalog)

    with pytest.raises(SitemapGenerationError):
        service.serve(now=0)
    assert service.entry is None


def test_zero_ttl_always_rebuilds(fake_catalog):
    service = _service(fake_catalog, ttl_ms=0)
    service.serve(now=0)
    service.serve(now=0)
    assert fake_catalog.calls == 2


def test_invalidate_forces_rebuild(fake_catalog):
    service = _service(fake_catalog)
    service.serve(now=0)
    service.invalidate()
    service.serve(now=1)
    assert fake_catalog.calls == 2


def test_cache_entry_is_immutable():
    entry = SitemapCacheEntry(document="<urlset/>", built_at=0)
    with pytest.raises(AttributeError):
        entry.document = "changed"


def test_config_from_settings_uses_site_url_chain():
    settings = Settings(SITE_URL=None, CLIENT_URL="https://client.example.com/", SITEMAP_CACHE_TTL_MS=5000)
    config = SitemapConfig.from_settings(settings)
    assert config.site_url == "https://client.example.com/"
    assert config.ttl_ms == 5000


def test_config_rejects_multiple_site_urls():
    settings = Settings(SITE_URL="https://a.example.com,https://b.example.com")
    with pytest.raises(ConfigurationError):
        SitemapConfig.from_settings(settings)


def test_build_failure_is_reported_and_cache_untouched(fake_catalog):
    service = _service(fake_catalog)
    document = service.serve(now=0)

    # not a CatalogItem: building the entry fails
    fake_catalog.items = [object()]
    with pytest.raises(SitemapGenerationError):
        service.serve(now=5000)
    assert service.entry.document == document
