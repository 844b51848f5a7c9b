"""Product and variant read paths."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.brand.brand import Brand
from catalogue.category.category import Category
from catalogue.category.subcategory import Subcategory
from catalogue.product.product import Product
from catalogue.shared.summaries import ordered_variants, product_card, variant_view
from shared.queries import fetch_all, index_by_id, paginate, paginate_query

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


def _get_or_none(aggregate_cls, identifier):
    if not identifier:
        return None
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        return None


def _card(product):
    return product_card(
        product,
        category=_get_or_none(Category, product.category_id),
        subcategory=_get_or_none(Subcategory, product.subcategory_id),
        brand=_get_or_none(Brand, product.brand_id),
    )


def _cards(products):
    """Cards for a page of products, loading each related aggregate type once."""

    def related(aggregate_cls, field):
        query = current_domain.repository_for(aggregate_cls)._dao.query
        return index_by_id(query, (getattr(p, field) for p in products))

    categories = related(Category, "category_id")
    subcategories = related(Subcategory, "subcategory_id")
    brands = related(Brand, "brand_id")

    return [
        product_card(
            p,
            category=categories.get(str(p.category_id)),
            subcategory=subcategories.get(str(p.subcategory_id)),
            brand=brands.get(str(p.brand_id)),
        )
        for p in products
    ]


def _resolve_active(identifier):
    repo = current_domain.repository_for(Product)
    matches = repo._dao.query.filter(slug=identifier, is_active=True).all().items
    if matches:
        return matches[0]

    product = _get_or_none(Product, identifier)
    if product is None or not product.is_active:
        raise ObjectNotFoundError({"_entity": f"Product {identifier} not found"})
    return product


def get_product(identifier):
    """Active product by slug or id, with relations, variants and derived fields."""
    product = _resolve_active(identifier)
    view = _card(product)
    view["specifications"] = product.specification_map
    view["variants"] = [variant_view(v) for v in ordered_variants(product)]
    return view


def list_products(
    category_id=None,
    subcategory_id=None,
    brand_id=None,
    featured=False,
    min_price=None,
    max_price=None,
    in_stock=False,
    tag=None,
    page=1,
    limit=DEFAULT_PAGE_SIZE,
):
    """Active products, newest first, one page at a time.

    Price bounds apply to the base price. ``in_stock`` keeps products whose
    active variants hold stock.
    """
    limit = min(max(limit or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)

    criteria = {"is_active": True}
    if category_id:
        criteria["category_id"] = str(category_id)
    if subcategory_id:
        criteria["subcategory_id"] = str(subcategory_id)
    if brand_id:
        criteria["brand_id"] = str(brand_id)
    if featured:
        criteria["is_featured"] = True
    if min_price is not None:
        criteria["base_price__gte"] = min_price
    if max_price is not None:
        criteria["base_price__lte"] = max_price

    query = current_domain.repository_for(Product)._dao.query.filter(**criteria).order_by("-created_at")

    if in_stock or tag:
        # Stock is derived from variants and tag membership has no portable
        # store lookup, so these filters run over the full match set.
        products = fetch_all(query)
        if in_stock:
            products = [p for p in products if p.total_stock > 0]
        if tag:
            products = [p for p in products if tag in p.tag_list]
        result = paginate(products, page or 1, limit)
    else:
        result = paginate_query(query, page or 1, limit)

    result["items"] = _cards(result["items"])
    return result


def list_variants(product_id):
    """Active variants of an active product, default first."""
    product = _resolve_active(product_id)
    return [variant_view(v) for v in ordered_variants(product)]


def get_variant(product_id, variant_id):
    """A variant by id, inactive ones included, with its product summary.

    Historical orders reference variants that may since have been
    deactivated, so neither the variant nor its product needs to be active.
    """
    product = current_domain.repository_for(Product).get(product_id)
    view = variant_view(product.get_variant(variant_id))
    view["product"] = {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "is_active": product.is_active,
    }
    return view
