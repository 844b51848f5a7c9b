"""Catalogue domain API package."""

from catalogue.api.routes import (
    brand_router,
    category_router,
    product_router,
    subcategory_router,
    upload_router,
)

__all__ = ["brand_router", "category_router", "product_router", "subcategory_router", "upload_router"]
