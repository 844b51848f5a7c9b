"""Brand management — commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.brand.brand import Brand, normalize_name
from catalogue.domain import catalogue
from catalogue.shared.text import clean_name, clean_optional
from shared.exceptions import DuplicateIdentifierError
from shared.identifiers import is_unique_violation


@catalogue.command(part_of="Brand")
class CreateBrand:
    name: String(required=True, max_length=100)
    name_en: String(max_length=100)
    logo: String(max_length=500)
    description: Text()
    is_active: Boolean(default=True)


@catalogue.command(part_of="Brand")
class UpdateBrand:
    brand_id: Identifier(required=True)
    name: String(max_length=100)
    name_en: String(max_length=100)
    logo: String(max_length=500)
    description: Text()
    is_active: Boolean()


@catalogue.command(part_of="Brand")
class DeactivateBrand:
    brand_id: Identifier(required=True)


def _ensure_name_free(name, exclude_id=None):
    matches = current_domain.repository_for(Brand)._dao.query.filter(name_key=normalize_name(name)).all().items
    if any(str(match.id) != str(exclude_id) for match in matches):
        raise DuplicateIdentifierError({"name": [f"Brand '{name}' already exists"]})


def _store(brand):
    """Persist ``brand``, reporting a store-level name clash as a duplicate name."""
    try:
        current_domain.repository_for(Brand).add(brand)
    except ValidationError as exc:
        if is_unique_violation(exc, "name_key"):
            raise DuplicateIdentifierError({"name": [f"Brand '{brand.name}' already exists"]}) from exc
        raise


@catalogue.command_handler(part_of=Brand)
class ManageBrandHandler:
    @handle(CreateBrand)
    def create_brand(self, command):
        name = clean_name(command.name, message="Brand name is required")
        _ensure_name_free(name)

        brand = Brand.create(
            name=name,
            name_en=clean_optional(command.name_en),
            logo=clean_optional(command.logo),
            description=clean_optional(command.description),
            is_active=True if command.is_active is None else command.is_active,
        )
        _store(brand)
        return str(brand.id)

    @handle(UpdateBrand)
    def update_brand(self, command):
        repo = current_domain.repository_for(Brand)
        brand = repo.get(command.brand_id)

        name = None
        if command.name is not None:
            name = clean_name(command.name, message="Brand name cannot be empty")
            if normalize_name(name) != brand.name_key:
                _ensure_name_free(name, exclude_id=brand.id)

        brand.update_details(
            name=name,
            name_en=command.name_en,
            logo=command.logo,
            description=command.description,
            is_active=command.is_active,
        )
        _store(brand)

    @handle(DeactivateBrand)
    def deactivate_brand(self, command):
        repo = current_domain.repository_for(Brand)
        brand = repo.get(command.brand_id)
        brand.deactivate()
        repo.add(brand)
