"""Product creation — command and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.product.relations import check_brand, check_category, check_subcategory, product_slug_taken
from catalogue.shared.structured import parse_images, parse_specifications, parse_tags
from catalogue.shared.text import clean_name, clean_optional
from shared.identifiers import PRODUCT_SLUG_MAX_LENGTH, slugify, unique_slug

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    slug: String(max_length=120)
    description: Text()
    base_price: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    brand_id: Identifier()
    images: Text()
    tags: Text()
    specifications: Text()
    is_featured: Boolean(default=False)
    is_active: Boolean(default=True)
    rating: Float(min_value=0.0, max_value=5.0)
    review_count: Integer(min_value=0)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        name = clean_name(command.name, message="Product name is required")

        # Structured fields are parsed before any lookups so bad payloads fail fast
        images = parse_images(command.images)
        tags = parse_tags(command.tags)
        specifications = parse_specifications(command.specifications)

        category = check_category(command.category_id)
        if command.subcategory_id:
            check_subcategory(command.subcategory_id, category.id)
        if command.brand_id:
            check_brand(command.brand_id)

        candidate = slugify(command.slug or name, PRODUCT_SLUG_MAX_LENGTH)
        slug = unique_slug(candidate, product_slug_taken)

        product = Product.create(
            name=name,
            slug=slug,
            base_price=command.base_price,
            category_id=category.id,
            subcategory_id=command.subcategory_id,
            brand_id=command.brand_id,
            description=clean_optional(command.description),
            images=images,
            tags=tags,
            specifications=specifications,
            is_featured=command.is_featured,
            is_active=True if command.is_active is None else command.is_active,
            rating=command.rating,
            review_count=command.review_count,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), slug=slug)
        return str(product.id)
