"""Variant management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product, Variant
from catalogue.shared.text import clean_name, clean_optional
from shared.exceptions import DuplicateIdentifierError
from shared.identifiers import validate_sku

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class AddVariant:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    sku: String(required=True, max_length=50)
    price: Integer(required=True, min_value=0)
    compare_price: Integer(min_value=0)
    stock: Integer(default=0, min_value=0)
    color: String(max_length=50)
    color_code: String(max_length=20)
    size: String(max_length=50)
    image: String(max_length=500)
    is_default: Boolean()


@catalogue.command(part_of="Product")
class UpdateVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    name: String(max_length=100)
    sku: String(max_length=50)
    price: Integer(min_value=0)
    compare_price: Integer(min_value=0)
    stock: Integer(min_value=0)
    color: String(max_length=50)
    color_code: String(max_length=20)
    size: String(max_length=50)
    image: String(max_length=500)
    is_default: Boolean()
    is_active: Boolean()


@catalogue.command(part_of="Product")
class DeactivateVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class SetDefaultVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)


def ensure_sku_free(sku, exclude_id=None):
    """SKUs are unique across the variants of every product."""
    matches = current_domain.repository_for(Variant)._dao.query.filter(sku=sku).all().items
    if any(str(match.id) != str(exclude_id) for match in matches):
        raise DuplicateIdentifierError({"sku": [f"SKU '{sku}' already exists"]})


@catalogue.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        sku = validate_sku(command.sku)
        ensure_sku_free(sku)

        variant = product.add_variant(
            name=clean_name(command.name, message="Variant name is required"),
            sku=sku,
            price=command.price,
            stock=command.stock or 0,
            color=clean_optional(command.color),
            color_code=clean_optional(command.color_code),
            size=clean_optional(command.size),
            compare_price=command.compare_price,
            image=clean_optional(command.image),
            is_default=command.is_default,
        )
        repo.add(product)
        logger.info(
            "variant_added",
            product_id=str(product.id),
            variant_id=str(variant.id),
            sku=sku,
            is_default=variant.is_default,
        )
        return str(variant.id)

    @handle(UpdateVariant)
    def update_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        variant = product.get_variant(command.variant_id)

        sku = None
        if command.sku is not None:
            sku = validate_sku(command.sku)
            if sku != variant.sku:
                ensure_sku_free(sku, exclude_id=variant.id)

        name = None
        if command.name is not None:
            name = clean_name(command.name, message="Variant name cannot be empty")

        product.update_variant(
            variant.id,
            name=name,
            sku=sku,
            price=command.price,
            stock=command.stock,
            color=clean_optional(command.color),
            color_code=clean_optional(command.color_code),
            size=clean_optional(command.size),
            compare_price=command.compare_price,
            image=clean_optional(command.image),
            is_default=command.is_default,
            is_active=command.is_active,
        )
        repo.add(product)

    @handle(DeactivateVariant)
    def deactivate_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate_variant(command.variant_id)
        repo.add(product)

    @handle(SetDefaultVariant)
    def set_default_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_default_variant(command.variant_id)
        repo.add(product)
