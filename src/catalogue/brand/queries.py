"""Brand read paths."""

from protean.utils.globals import current_domain

from catalogue.brand.brand import Brand
from catalogue.product.product import Product
from catalogue.shared.summaries import product_card
from shared.queries import fetch_all

NEWEST_PRODUCTS_LIMIT = 10


def _brand_view(brand, products_count):
    return {
        "id": str(brand.id),
        "name": brand.name,
        "name_en": brand.name_en,
        "logo": brand.logo,
        "description": brand.description,
        "is_active": brand.is_active,
        "products_count": products_count,
        "created_at": brand.created_at,
        "updated_at": brand.updated_at,
    }


def _active_products(brand):
    query = current_domain.repository_for(Product)._dao.query
    return query.filter(brand_id=str(brand.id), is_active=True)


def list_brands():
    """Active brands ordered by name, each with its active product count."""
    brands = fetch_all(current_domain.repository_for(Brand)._dao.query.filter(is_active=True))
    brands.sort(key=lambda b: b.name_key)
    return [_brand_view(brand, _active_products(brand).count()) for brand in brands]


def get_brand(brand_id):
    """One brand with its newest active products.

    Inactive brands stay resolvable by id so products that still reference
    them can render their brand.
    """
    brand = current_domain.repository_for(Brand).get(brand_id)

    products = _active_products(brand)
    newest = products.order_by("-created_at").limit(NEWEST_PRODUCTS_LIMIT).all().items

    view = _brand_view(brand, products.count())
    view["products"] = [product_card(p) for p in newest]
    return view
