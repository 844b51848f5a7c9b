"""Subcategory management — commands and handlers."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.category.subcategory import Subcategory
from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.shared.text import clean_name
from shared.exceptions import DuplicateIdentifierError, InvalidRelationError
from shared.identifiers import CATEGORY_SLUG_MAX_LENGTH, slugify, unique_slug


@catalogue.command(part_of="Subcategory")
class CreateSubcategory:
    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)


@catalogue.command(part_of="Subcategory")
class UpdateSubcategory:
    subcategory_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    is_active: Boolean()
    sort_order: Integer()


@catalogue.command(part_of="Subcategory")
class MoveSubcategory:
    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)


@catalogue.command(part_of="Subcategory")
class DeactivateSubcategory:
    subcategory_id: Identifier(required=True)


def subcategory_slug_taken(category_id, slug, exclude_id=None):
    """True when another subcategory of ``category_id`` already uses ``slug``."""
    matches = (
        current_domain.repository_for(Subcategory)
        ._dao.query.filter(category_id=str(category_id), slug=slug)
        .all()
        .items
    )
    return any(str(match.id) != str(exclude_id) for match in matches)


@catalogue.command_handler(part_of=Subcategory)
class ManageSubcategoryHandler:
    @handle(CreateSubcategory)
    def create_subcategory(self, command):
        category = current_domain.repository_for(Category).get(command.category_id)

        name = clean_name(command.name, message="Subcategory name is required")
        candidate = slugify(command.slug or name, CATEGORY_SLUG_MAX_LENGTH)
        slug = unique_slug(candidate, lambda value: subcategory_slug_taken(category.id, value))

        subcategory = Subcategory.create(
            name=name,
            slug=slug,
            category_id=category.id,
            is_active=True if command.is_active is None else command.is_active,
            sort_order=command.sort_order or 0,
        )
        current_domain.repository_for(Subcategory).add(subcategory)
        return str(subcategory.id)

    @handle(UpdateSubcategory)
    def update_subcategory(self, command):
        repo = current_domain.repository_for(Subcategory)
        subcategory = repo.get(command.subcategory_id)

        name = None
        if command.name is not None:
            name = clean_name(command.name, message="Subcategory name cannot be empty")

        def taken(value):
            return subcategory_slug_taken(subcategory.category_id, value, exclude_id=subcategory.id)

        slug = None
        if command.slug:
            slug = slugify(command.slug, CATEGORY_SLUG_MAX_LENGTH)
            if slug != subcategory.slug and taken(slug):
                raise DuplicateIdentifierError(
                    {"slug": [f"Subcategory slug '{slug}' already exists in this category"]}
                )
        elif name is not None and name != subcategory.name:
            slug = unique_slug(slugify(name, CATEGORY_SLUG_MAX_LENGTH), taken)

        subcategory.update_details(
            name=name,
            slug=slug,
            is_active=command.is_active,
            sort_order=command.sort_order,
        )
        repo.add(subcategory)

    @handle(MoveSubcategory)
    def move_subcategory(self, command):
        repo = current_domain.repository_for(Subcategory)
        subcategory = repo.get(command.subcategory_id)
        target = current_domain.repository_for(Category).get(command.category_id)

        # Products keep pointing at the subcategory, so moving it would make
        # their (category, subcategory) pair inconsistent
        referencing = (
            current_domain.repository_for(Product)
            ._dao.query.filter(subcategory_id=str(subcategory.id))
            .all()
            .total
        )
        if referencing:
            raise InvalidRelationError(
                {
                    "category_id": [
                        f"Subcategory is referenced by {referencing} product(s) and cannot change category"
                    ]
                }
            )

        slug = unique_slug(
            subcategory.slug,
            lambda value: subcategory_slug_taken(target.id, value, exclude_id=subcategory.id),
        )
        subcategory.move_to(target.id, slug)
        repo.add(subcategory)

    @handle(DeactivateSubcategory)
    def deactivate_subcategory(self, command):
        repo = current_domain.repository_for(Subcategory)
        subcategory = repo.get(command.subcategory_id)
        subcategory.deactivate()
        repo.add(subcategory)
