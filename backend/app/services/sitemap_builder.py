"""
Sitemap Builder — renders a sitemap-protocol XML document.

Combines the fixed storefront pages with one entry per catalog product.
No database access and no clock; output depends only on the inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable, Optional, Sequence, Union
from urllib.parse import quote
from uuid import UUID

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone
_SLUG_SAFE_CHARS = "-_.!~*'()"

_XML_ESCAPES = (
    ("&", "&amp;"),  # must run first
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

Timestamp = Union[datetime, date, str]


class ChangeFrequency(str, Enum):
    """Crawl frequency hints used by the storefront"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class StaticPage:
    path: str
    changefreq: ChangeFrequency
    priority: float

    def __post_init__(self):
        if not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"priority must be within [0.0, 1.0], got {self.priority}")


@dataclass(frozen=True)
class CatalogItem:
    """Read-only view of a product, limited to what the sitemap needs"""
    id: Optional[Union[UUID, str]]
    slug: Optional[str] = None
    updated_at: Optional[Timestamp] = None
    created_at: Optional[Timestamp] = None

    def __post_init__(self):
        if not self.slug and (self.id is None or str(self.id) == ""):
            raise ValueError("catalog item needs a slug or an id")


@dataclass(frozen=True)
class UrlEntry:
    loc: str
    lastmod: Optional[Timestamp] = None
    changefreq: ChangeFrequency = ChangeFrequency.WEEKLY
    priority: float = 0.8


STATIC_PAGES: tuple[StaticPage, ...] = (
    StaticPage("/", ChangeFrequency.DAILY, 1.0),
    StaticPage("/about", ChangeFrequency.MONTHLY, 0.7),
    StaticPage("/fashion", ChangeFrequency.WEEKLY, 0.9),
    StaticPage("/featured", ChangeFrequency.WEEKLY, 0.9),
    StaticPage("/electronics", ChangeFrequency.WEEKLY, 0.9),
    StaticPage("/beauty", ChangeFrequency.WEEKLY, 0.85),
    StaticPage("/sports", ChangeFrequency.WEEKLY, 0.85),
    StaticPage("/products", ChangeFrequency.DAILY, 1.0),
    StaticPage("/cart", ChangeFrequency.DAILY, 0.8),
    StaticPage("/my-orders", ChangeFrequency.DAILY, 0.7),
    StaticPage("/login", ChangeFrequency.MONTHLY, 0.5),
    StaticPage("/policy", ChangeFrequency.MONTHLY, 0.6),
)


def escape_xml(value: object) -> str:
    """Escape the five XML special characters in text content."""
    text = str(value)
    for raw, entity in _XML_ESCAPES:
        text = text.replace(raw, entity)
    return text


def format_lastmod(value: Timestamp) -> Optional[str]:
    """
    Render a timestamp as a calendar date (YYYY-MM-DD).

    Aware datetimes are converted to UTC first; ISO-8601 strings
    (including a trailing ``Z``) are parsed. Unparseable strings are
    logged and yield None, so the entry is written without a lastmod.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Ignoring unparseable lastmod value {value!r}")
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def _normalize_base_url(base_url: str) -> str:
    return base_url[:-1] if base_url.endswith("/") else base_url


def product_entry(base_url: str, item: CatalogItem) -> UrlEntry:
    """Build the URL entry for one catalog product (slug first, id fallback)."""
    if item.slug:
        identifier = quote(item.slug, safe=_SLUG_SAFE_CHARS)
    else:
        identifier = str(item.id)
    lastmod = item.updated_at or item.created_at or None
    return UrlEntry(
        loc=f"{_normalize_base_url(base_url)}/product/{identifier}",
        lastmod=lastmod,
        changefreq=ChangeFrequency.WEEKLY,
        priority=0.8,
    )


def static_entry(base_url: str, page: StaticPage) -> UrlEntry:
    return UrlEntry(
        loc=f"{_normalize_base_url(base_url)}{page.path}",
        changefreq=page.changefreq,
        priority=page.priority,
    )


def render_url_entry(entry: UrlEntry) -> str:
    lines = ["  <url>", f"    <loc>{escape_xml(entry.loc)}</loc>"]
    lastmod = format_lastmod(entry.lastmod) if entry.lastmod else None
    if lastmod:
        lines.append(f"    <lastmod>{lastmod}</lastmod>")
    lines.append(f"    <changefreq>{ChangeFrequency(entry.changefreq).value}</changefreq>")
    lines.append(f"    <priority>{entry.priority}</priority>")
    lines.append("  </url>")
    return "\n".join(lines)


def build_sitemap_xml(
    base_url: str,
    static_pages: Sequence[StaticPage] = STATIC_PAGES,
    catalog_items: Iterable[CatalogItem] = (),
) -> str:
    """
    Build the full sitemap document.

    Static pages come first, in the order given, followed by one entry
    per catalog item. The base URL is not validated; a trailing slash is
    dropped before paths are appended.

    Returns:
        The XML document as a string, starting with the XML declaration.
    """
    entries = [static_entry(base_url, page) for page in static_pages]
    entries.extend(product_entry(base_url, item) for item in catalog_items)

    parts = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NS}">']
    parts.extend(render_url_entry(entry) for entry in entries)
    parts.append("</urlset>")
    return "\n".join(parts) + "\n"
