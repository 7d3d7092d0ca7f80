"""
Product catalog lookups used by the sitemap
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.core.database_utils import get_db_session
from app.models.product import Product
from app.services.sitemap_builder import CatalogItem

logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Read-only access to the product table.

    Only the columns the sitemap needs are selected; every product is
    returned regardless of status.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory

    def list_items(self) -> List[CatalogItem]:
        with get_db_session(self._session_factory) as db:
            rows = (
                db.query(Product.id, Product.slug, Product.updated_at, Product.created_at)
                .order_by(Product.created_at, Product.id)
                .all()
            )
        logger.debug(f"Loaded {len(rows)} catalog items")
        return [
            CatalogItem(
                id=row.id,
                slug=row.slug,
                updated_at=row.updated_at,
                created_at=row.created_at,
            )
            for row in rows
        ]
