"""Category management — commands and handlers."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.shared.text import clean_name, clean_optional
from shared.exceptions import DuplicateIdentifierError
from shared.identifiers import CATEGORY_SLUG_MAX_LENGTH, slugify, unique_slug


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean()
    sort_order: Integer()


@catalogue.command(part_of="Category")
class ReorderCategory:
    category_id: Identifier(required=True)
    sort_order: Integer(required=True)


@catalogue.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


def category_slug_taken(slug, exclude_id=None):
    """True when another category already uses ``slug``."""
    matches = current_domain.repository_for(Category)._dao.query.filter(slug=slug).all().items
    return any(str(match.id) != str(exclude_id) for match in matches)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        name = clean_name(command.name, message="Category name is required")
        candidate = slugify(command.slug or name, CATEGORY_SLUG_MAX_LENGTH)
        slug = unique_slug(candidate, category_slug_taken)

        category = Category.create(
            name=name,
            slug=slug,
            description=clean_optional(command.description),
            image=clean_optional(command.image),
            is_active=True if command.is_active is None else command.is_active,
            sort_order=command.sort_order or 0,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        name = None
        if command.name is not None:
            name = clean_name(command.name, message="Category name cannot be empty")

        slug = None
        if command.slug:
            # An explicit slug is taken as-is; collisions are reported, not suffixed
            slug = slugify(command.slug, CATEGORY_SLUG_MAX_LENGTH)
            if slug != category.slug and category_slug_taken(slug, exclude_id=category.id):
                raise DuplicateIdentifierError({"slug": [f"Category slug '{slug}' already exists"]})
        elif name is not None and name != category.name:
            candidate = slugify(name, CATEGORY_SLUG_MAX_LENGTH)
            slug = unique_slug(candidate, lambda value: category_slug_taken(value, exclude_id=category.id))

        category.update_details(
            name=name,
            slug=slug,
            description=command.description,
            image=command.image,
            is_active=command.is_active,
        )
        if command.sort_order is not None and command.sort_order != category.sort_order:
            category.reorder(command.sort_order)
        repo.add(category)

    @handle(ReorderCategory)
    def reorder_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.reorder(command.sort_order)
        repo.add(category)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)
