"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    base_price: Integer(required=True)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    brand_id: Identifier()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields, pricing or visibility of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    base_price: Integer(required=True)
    is_featured: Boolean()
    is_active: Boolean()


@catalogue.event(part_of="Product")
class ProductRecategorized:
    """A product's category, subcategory or brand reference changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_category_id: Identifier()
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    brand_id: Identifier()


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was soft deleted; its variants stay resolvable by id."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class VariantAdded:
    """A new purchasable variant was added to a product."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    sku: String(required=True)
    price: Integer(required=True)
    stock: Integer(required=True)
    is_default: Boolean()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class VariantUpdated:
    """A variant's descriptive fields, price, stock or flags changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    sku: String(required=True)
    price: Integer(required=True)
    stock: Integer(required=True)
    is_default: Boolean()
    is_active: Boolean()


@catalogue.event(part_of="Product")
class VariantDeactivated:
    """A variant was soft deleted."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    sku: String(required=True)


@catalogue.event(part_of="Product")
class DefaultVariantChanged:
    """The variant representing the product in listings changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_variant_id: Identifier()
    variant_id: Identifier()
