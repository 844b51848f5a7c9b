"""Product details management — command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.product.relations import check_brand, check_category, check_subcategory, product_slug_taken
from catalogue.shared.structured import parse_images, parse_specifications, parse_tags
from catalogue.shared.text import clean_name
from shared.exceptions import DuplicateIdentifierError
from shared.identifiers import PRODUCT_SLUG_MAX_LENGTH, slugify, unique_slug


@catalogue.command(part_of="Product")
class UpdateProduct:
    """Partial update: fields left as None keep their current value.

    ``subcategory_id`` and ``brand_id`` can only be unset through the
    ``clear_subcategory`` and ``clear_brand`` flags.
    """

    product_id: Identifier(required=True)
    name: String(max_length=255)
    slug: String(max_length=120)
    description: Text()
    base_price: Integer(min_value=0)
    category_id: Identifier()
    subcategory_id: Identifier()
    brand_id: Identifier()
    clear_subcategory: Boolean(default=False)
    clear_brand: Boolean(default=False)
    images: Text()
    tags: Text()
    specifications: Text()
    is_featured: Boolean()
    is_active: Boolean()
    rating: Float(min_value=0.0, max_value=5.0)
    review_count: Integer(min_value=0)


def _optional(raw, parser):
    return None if raw is None else parser(raw)


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        images = _optional(command.images, parse_images)
        tags = _optional(command.tags, parse_tags)
        specifications = _optional(command.specifications, parse_specifications)

        name = None
        if command.name is not None:
            name = clean_name(command.name, message="Product name cannot be empty")

        slug = None
        if command.slug:
            slug = slugify(command.slug, PRODUCT_SLUG_MAX_LENGTH)
            if slug != product.slug and product_slug_taken(slug, exclude_id=product.id):
                raise DuplicateIdentifierError({"slug": [f"Product slug '{slug}' already exists"]})
        elif name is not None and name != product.name:
            slug = unique_slug(
                slugify(name, PRODUCT_SLUG_MAX_LENGTH),
                lambda value: product_slug_taken(value, exclude_id=product.id),
            )

        self._apply_relations(product, command)

        product.update_details(
            name=name,
            slug=slug,
            description=command.description,
            base_price=command.base_price,
            images=images,
            tags=tags,
            specifications=specifications,
            is_featured=command.is_featured,
            is_active=command.is_active,
            rating=command.rating,
            review_count=command.review_count,
        )
        repo.add(product)

    def _apply_relations(self, product, command):
        category_id = command.category_id or product.category_id
        category_changed = str(category_id) != str(product.category_id)

        if command.clear_subcategory:
            subcategory_id = None
        else:
            subcategory_id = command.subcategory_id or product.subcategory_id
        subcategory_changed = str(subcategory_id) != str(product.subcategory_id)

        if command.clear_brand:
            brand_id = None
        else:
            brand_id = command.brand_id or product.brand_id
        brand_changed = str(brand_id) != str(product.brand_id)

        if not (category_changed or subcategory_changed or brand_changed):
            return

        if category_changed:
            check_category(category_id)
        # A kept subcategory is re-checked against a new category as well
        if subcategory_id and (category_changed or subcategory_changed):
            check_subcategory(subcategory_id, category_id)
        if brand_id and brand_changed:
            check_brand(brand_id)

        product.recategorize(category_id, subcategory_id=subcategory_id, brand_id=brand_id)
