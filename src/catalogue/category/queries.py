"""Category and subcategory read paths."""

from datetime import datetime

from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.category.subcategory import Subcategory
from catalogue.product.product import Product
from shared.queries import fetch_all


def _display_order(item):
    return (item.sort_order or 0, item.created_at or datetime.min)


def _active_product_count(field, identifier):
    query = current_domain.repository_for(Product)._dao.query
    return query.filter(is_active=True, **{field: str(identifier)}).count()


def _subcategory_view(subcategory, products_count=None):
    view = {
        "id": str(subcategory.id),
        "name": subcategory.name,
        "slug": subcategory.slug,
        "category_id": str(subcategory.category_id),
        "is_active": subcategory.is_active,
        "sort_order": subcategory.sort_order,
    }
    if products_count is not None:
        view["products_count"] = products_count
    return view


def _category_view(category, subcategories, products_count):
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "image": category.image,
        "is_active": category.is_active,
        "sort_order": category.sort_order,
        "products_count": products_count,
        "subcategories": [_subcategory_view(s) for s in subcategories],
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def _active_subcategories(category_id=None):
    query = current_domain.repository_for(Subcategory)._dao.query.filter(is_active=True)
    if category_id is not None:
        query = query.filter(category_id=str(category_id))
    return sorted(fetch_all(query), key=_display_order)


def list_categories():
    """Active categories in display order, each with its active subcategories."""
    categories = fetch_all(current_domain.repository_for(Category)._dao.query.filter(is_active=True))
    categories.sort(key=_display_order)

    by_category = {}
    for subcategory in _active_subcategories():
        by_category.setdefault(str(subcategory.category_id), []).append(subcategory)

    return [
        _category_view(c, by_category.get(str(c.id), []), _active_product_count("category_id", c.id))
        for c in categories
    ]


def get_category(identifier):
    """Resolve a category by slug (active only) or by id (any state)."""
    repo = current_domain.repository_for(Category)
    matches = repo._dao.query.filter(slug=identifier, is_active=True).all().items
    category = matches[0] if matches else repo.get(identifier)

    return _category_view(
        category,
        _active_subcategories(category.id),
        _active_product_count("category_id", category.id),
    )


def list_subcategories(category_id):
    """Active subcategories of one category in display order."""
    category = current_domain.repository_for(Category).get(category_id)
    return [
        _subcategory_view(s, _active_product_count("subcategory_id", s.id))
        for s in _active_subcategories(category.id)
    ]


def get_subcategory(subcategory_id):
    subcategory = current_domain.repository_for(Subcategory).get(subcategory_id)
    return _subcategory_view(subcategory, _active_product_count("subcategory_id", subcategory.id))
