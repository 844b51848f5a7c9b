"""Cross-aggregate reference checks for products."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.brand.brand import Brand
from catalogue.category.category import Category
from catalogue.category.subcategory import Subcategory
from catalogue.product.product import Product
from shared.exceptions import InvalidRelationError


def _load(aggregate_cls, identifier, field, label):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise InvalidRelationError({field: [f"{label} {identifier} does not exist"]}) from None


def check_category(category_id):
    return _load(Category, category_id, "category_id", "Category")


def check_subcategory(subcategory_id, category_id):
    """The subcategory must exist and belong to ``category_id``."""
    subcategory = _load(Subcategory, subcategory_id, "subcategory_id", "Subcategory")
    if str(subcategory.category_id) != str(category_id):
        raise InvalidRelationError(
            {"subcategory_id": [f"Subcategory {subcategory_id} does not belong to category {category_id}"]}
        )
    return subcategory


def check_brand(brand_id):
    return _load(Brand, brand_id, "brand_id", "Brand")


def product_slug_taken(slug, exclude_id=None):
    """True when another product already uses ``slug``."""
    matches = current_domain.repository_for(Product)._dao.query.filter(slug=slug).all().items
    return any(str(match.id) != str(exclude_id) for match in matches)
