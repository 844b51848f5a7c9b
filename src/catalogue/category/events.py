"""Domain events for the Category and Subcategory aggregates."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new top-level category was added to the catalogue."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    sort_order: Integer(required=True)


@catalogue.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name, slug, description, image or visibility changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    is_active: Boolean()


@catalogue.event(part_of="Category")
class CategoryReordered:
    """A category's display position was changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    previous_order: Integer(required=True)
    new_order: Integer(required=True)


@catalogue.event(part_of="Category")
class CategoryDeactivated:
    """A category was soft deleted and hidden from the storefront."""

    __version__ = 1

    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@catalogue.event(part_of="Subcategory")
class SubcategoryCreated:
    """A subcategory was added under a category."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Subcategory")
class SubcategoryDetailsUpdated:
    """A subcategory's name, slug, visibility or position changed."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    is_active: Boolean()


@catalogue.event(part_of="Subcategory")
class SubcategoryMoved:
    """A subcategory that no product referenced was moved to another category."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    previous_category_id: Identifier(required=True)
    new_category_id: Identifier(required=True)


@catalogue.event(part_of="Subcategory")
class SubcategoryDeactivated:
    """A subcategory was soft deleted."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
