"""Product aggregate root with its Variant entities."""

from datetime import datetime

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Dict,
    Float,
    HasMany,
    Identifier,
    Integer,
    List,
    String,
    Text,
)

from catalogue.domain import catalogue

logger = structlog.get_logger(__name__)


@catalogue.entity(part_of="Product")
class Variant:
    """A purchasable option of a product with its own globally unique SKU."""

    name: String(required=True, max_length=100)
    sku: String(required=True, max_length=50, unique=True)
    color: String(max_length=50)
    color_code: String(max_length=20)
    size: String(max_length=50)
    price: Integer(required=True, min_value=0)
    compare_price: Integer(min_value=0)
    stock: Integer(default=0, min_value=0)
    image: String(max_length=500)
    is_default: Boolean(default=False)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)


@catalogue.aggregate
class Product:
    """Product aggregate root.

    Pricing and stock shown in listings are derived from the active variants:
    the default variant supplies the effective price, and stock is the sum
    over active variants. A product without active variants falls back to its
    base price and has no stock.
    """

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    base_price: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    brand_id: Identifier()
    images: List(content_type=String(max_length=500))
    tags: List(content_type=String(max_length=100))
    specifications: Dict()
    is_featured: Boolean(default=False)
    is_active: Boolean(default=True)
    rating: Float(min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    variants: HasMany(Variant)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def inactive_variants_cannot_be_default(self):
        if any(v.is_default and not v.is_active for v in self.variants):
            raise ValidationError({"variants": ["An inactive variant cannot be the default"]})

    @invariant.post
    def exactly_one_default_among_active_variants(self):
        active = [v for v in self.variants if v.is_active]
        if not active:
            return
        defaults = [v for v in active if v.is_default]
        if len(defaults) != 1:
            raise ValidationError({"variants": ["Exactly one active variant must be the default"]})

    # Collection views

    @property
    def image_list(self) -> list[str]:
        return list(self.images or [])

    @property
    def tag_list(self) -> list[str]:
        return list(self.tags or [])

    @property
    def specification_map(self) -> dict:
        return dict(self.specifications or {})

    # Derived fields

    @property
    def active_variants(self):
        """Active variants in creation order."""
        return sorted(
            (v for v in self.variants if v.is_active),
            key=lambda v: v.created_at or datetime.min,
        )

    @property
    def default_variant(self):
        return next((v for v in self.variants if v.is_active and v.is_default), None)

    @property
    def effective_price(self) -> int:
        default = self.default_variant
        return default.price if default is not None else self.base_price

    @property
    def min_price(self) -> int:
        prices = [v.price for v in self.active_variants]
        return min(prices) if prices else self.base_price

    @property
    def total_stock(self) -> int:
        return sum(v.stock or 0 for v in self.active_variants)

    @property
    def has_variants(self) -> bool:
        return bool(self.active_variants)

    @property
    def variant_count(self) -> int:
        return len(self.active_variants)

    @property
    def primary_image(self):
        images = self.image_list
        return images[0] if images else None

    @classmethod
    def create(
        cls,
        name,
        slug,
        base_price,
        category_id,
        subcategory_id=None,
        brand_id=None,
        description=None,
        images=None,
        tags=None,
        specifications=None,
        is_featured=False,
        is_active=True,
        rating=None,
        review_count=0,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slug,
            base_price=base_price,
            category_id=category_id,
            subcategory_id=subcategory_id,
            brand_id=brand_id,
            description=description,
            images=list(images or []),
            tags=list(tags or []),
            specifications=dict(specifications or {}),
            is_featured=bool(is_featured),
            is_active=is_active,
            rating=rating,
            review_count=review_count or 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=slug,
                base_price=base_price,
                category_id=category_id,
                subcategory_id=subcategory_id,
                brand_id=brand_id,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        slug=None,
        description=None,
        base_price=None,
        images=None,
        tags=None,
        specifications=None,
        is_featured=None,
        is_active=None,
        rating=None,
        review_count=None,
    ):
        from catalogue.product.events import ProductDetailsUpdated

        with atomic_change(self):
            if name is not None:
                self.name = name
            if slug is not None:
                self.slug = slug
            if description is not None:
                self.description = description
            if base_price is not None:
                self.base_price = base_price
            if images is not None:
                self.images = list(images)
            if tags is not None:
                self.tags = list(tags)
            if specifications is not None:
                self.specifications = dict(specifications)
            if is_featured is not None:
                self.is_featured = is_featured
            if is_active is not None:
                self.is_active = is_active
            if rating is not None:
                self.rating = rating
            if review_count is not None:
                self.review_count = review_count

            self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                base_price=self.base_price,
                is_featured=self.is_featured,
                is_active=self.is_active,
            )
        )

    def recategorize(self, category_id, subcategory_id=None, brand_id=None):
        """Point the product at a new category, subcategory and brand.

        All three references are replaced together; passing None clears the
        optional ones. Cross-aggregate existence checks happen in the handler.
        """
        from catalogue.product.events import ProductRecategorized

        previous_category_id = self.category_id
        with atomic_change(self):
            self.category_id = category_id
            self.subcategory_id = subcategory_id
            self.brand_id = brand_id
            self.updated_at = datetime.now()

        self.raise_(
            ProductRecategorized(
                product_id=self.id,
                previous_category_id=previous_category_id,
                category_id=category_id,
                subcategory_id=subcategory_id,
                brand_id=brand_id,
            )
        )

    def deactivate(self):
        from catalogue.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Product is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            ProductDeactivated(
                product_id=self.id,
                deactivated_at=now,
            )
        )

    # Variants

    def get_variant(self, variant_id):
        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ObjectNotFoundError({"_entity": f"Variant {variant_id} not found"})
        return variant

    def _elect_default(self):
        """Promote the earliest-created active variant when none is default."""
        if self.default_variant is not None:
            return None
        candidates = self.active_variants
        if not candidates:
            return None
        candidates[0].is_default = True
        return candidates[0]

    def _make_default(self, variant):
        for sibling in self.variants:
            if sibling is not variant and sibling.is_default:
                sibling.is_default = False
        variant.is_default = True

    def add_variant(
        self,
        name,
        sku,
        price,
        stock=0,
        color=None,
        color_code=None,
        size=None,
        compare_price=None,
        image=None,
        is_default=None,
    ):
        from catalogue.product.events import VariantAdded

        previous_default = self.default_variant

        with atomic_change(self):
            variant = Variant(
                name=name,
                sku=sku,
                price=price,
                stock=stock or 0,
                color=color,
                color_code=color_code,
                size=size,
                compare_price=compare_price,
                image=image,
                is_default=False,
                created_at=datetime.now(),
            )
            self.add_variants(variant)
            # The first active variant is always the default
            if is_default or previous_default is None:
                self._make_default(variant)
            self.updated_at = datetime.now()

        self.raise_(
            VariantAdded(
                product_id=self.id,
                variant_id=variant.id,
                sku=sku,
                price=price,
                stock=variant.stock,
                is_default=variant.is_default,
                created_at=variant.created_at,
            )
        )
        self._announce_default_change(previous_default)
        return variant

    def update_variant(
        self,
        variant_id,
        name=None,
        sku=None,
        price=None,
        stock=None,
        color=None,
        color_code=None,
        size=None,
        compare_price=None,
        image=None,
        is_default=None,
        is_active=None,
    ):
        from catalogue.product.events import VariantUpdated

        variant = self.get_variant(variant_id)
        previous_default = self.default_variant

        will_be_active = variant.is_active if is_active is None else is_active
        if is_default is True and not will_be_active:
            raise ValidationError({"is_default": ["An inactive variant cannot be the default"]})
        if is_default is False and variant.is_default and will_be_active:
            if not any(v is not variant for v in self.active_variants):
                raise ValidationError({"is_default": ["The only active variant must remain the default"]})

        with atomic_change(self):
            for attr, value in (
                ("name", name),
                ("sku", sku),
                ("price", price),
                ("stock", stock),
                ("color", color),
                ("color_code", color_code),
                ("size", size),
                ("compare_price", compare_price),
                ("image", image),
            ):
                if value is not None:
                    setattr(variant, attr, value)

            if is_active is False and variant.is_active:
                variant.is_active = False
                variant.is_default = False
            elif is_active is True and not variant.is_active:
                variant.is_active = True

            if is_default is True:
                self._make_default(variant)
            elif is_default is False and variant.is_default:
                self._hand_over_default(variant)

            self._elect_default()
            self.updated_at = datetime.now()

        self.raise_(
            VariantUpdated(
                product_id=self.id,
                variant_id=variant.id,
                sku=variant.sku,
                price=variant.price,
                stock=variant.stock,
                is_default=variant.is_default,
                is_active=variant.is_active,
            )
        )
        self._announce_default_change(previous_default)
        return variant

    def _hand_over_default(self, variant):
        """Pass the default flag from ``variant`` to the earliest other active variant."""
        successor = next(v for v in self.active_variants if v is not variant)
        variant.is_default = False
        successor.is_default = True

    def set_default_variant(self, variant_id):
        variant = self.get_variant(variant_id)
        if not variant.is_active:
            raise ValidationError({"is_default": ["An inactive variant cannot be the default"]})
        if variant.is_default:
            return

        previous_default = self.default_variant
        with atomic_change(self):
            self._make_default(variant)
            self.updated_at = datetime.now()

        self._announce_default_change(previous_default)

    def deactivate_variant(self, variant_id):
        from catalogue.product.events import VariantDeactivated

        variant = self.get_variant(variant_id)
        if not variant.is_active:
            raise ValidationError({"status": ["Variant is already inactive"]})

        previous_default = self.default_variant
        with atomic_change(self):
            variant.is_active = False
            variant.is_default = False
            self._elect_default()
            self.updated_at = datetime.now()

        self.raise_(
            VariantDeactivated(
                product_id=self.id,
                variant_id=variant.id,
                sku=variant.sku,
            )
        )
        self._announce_default_change(previous_default)

    def _announce_default_change(self, previous_default):
        from catalogue.product.events import DefaultVariantChanged

        current = self.default_variant
        previous_id = previous_default.id if previous_default is not None else None
        current_id = current.id if current is not None else None
        if previous_id == current_id:
            return

        logger.info(
            "default_variant_changed",
            product_id=str(self.id),
            previous_variant_id=previous_id and str(previous_id),
            variant_id=current_id and str(current_id),
        )
        self.raise_(
            DefaultVariantChanged(
                product_id=self.id,
                previous_variant_id=previous_id,
                variant_id=current_id,
            )
        )
