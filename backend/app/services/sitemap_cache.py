"""
Cached sitemap service

Holds one cached sitemap document and rebuilds it from the catalog once
it is older than the configured TTL.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence

from app.core.config import Settings, resolve_site_url
from app.services.sitemap_builder import (
    STATIC_PAGES,
    CatalogItem,
    StaticPage,
    build_sitemap_xml,
)

logger = logging.getLogger(__name__)


class SitemapGenerationError(Exception):
    """Raised when the sitemap cannot be rebuilt"""
    pass


class Catalog(Protocol):
    def list_items(self) -> Iterable[CatalogItem]:
        ...


@dataclass(frozen=True)
class SitemapConfig:
    site_url: str
    ttl_ms: int

    @classmethod
    def from_settings(cls, settings: Settings) -> "SitemapConfig":
        """
        Raises:
            ConfigurationError: if the site URL setting lists several URLs
        """
        return cls(site_url=resolve_site_url(settings), ttl_ms=settings.SITEMAP_CACHE_TTL_MS)


@dataclass(frozen=True)
class SitemapCacheEntry:
    document: str
    built_at: float  # epoch milliseconds


def _now_ms() -> float:
    return time.time() * 1000


class SitemapService:
    """
    Serves the sitemap document from a single-slot TTL cache.

    Concurrent misses may each rebuild; the last completed rebuild wins.
    The slot is replaced as a whole, so readers always see a complete
    document.
    """

    def __init__(
        self,
        config: SitemapConfig,
        catalog: Catalog,
        clock: Optional[Callable[[], float]] = None,
        static_pages: Sequence[StaticPage] = STATIC_PAGES,
    ):
        self.config = config
        self.catalog = catalog
        self._clock = clock or _now_ms
        self._static_pages = tuple(static_pages)
        self._entry: Optional[SitemapCacheEntry] = None

    @property
    def entry(self) -> Optional[SitemapCacheEntry]:
        return self._entry

    def is_fresh(self, now: Optional[float] = None) -> bool:
        entry = self._entry
        if entry is None:
            return False
        if now is None:
            now = self._clock()
        return now - entry.built_at < self.config.ttl_ms

    def invalidate(self) -> None:
        self._entry = None

    def serve(self, now: Optional[float] = None) -> str:
        """
        Return the sitemap, rebuilding it when the cached copy is missing
        or expired.

        Args:
            now: current time in epoch milliseconds (defaults to the clock)

        Raises:
            SitemapGenerationError: if the catalog lookup or the build fails;
                the cached entry is left as it was (already logged)
        """
        if now is None:
            now = self._clock()

        entry = self._entry
        if entry is not None and now - entry.built_at < self.config.ttl_ms:
            return entry.document

        try:
            items = list(self.catalog.list_items())
            document = build_sitemap_xml(self.config.site_url, self._static_pages, items)
        except Exception as e:
            logger.error(f"Error generating sitemap: {e}", exc_info=True)
            raise SitemapGenerationError(str(e)) from e

        self._entry = SitemapCacheEntry(document=document, built_at=now)
        logger.info(f"Sitemap rebuilt with {len(items)} products")
        return document
