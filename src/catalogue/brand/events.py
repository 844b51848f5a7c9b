"""Domain events for the Brand aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Brand")
class BrandCreated:
    """A new brand was registered."""

    __version__ = 1

    brand_id: Identifier(required=True)
    name: String(required=True)
    name_en: String()


@catalogue.event(part_of="Brand")
class BrandDetailsUpdated:
    """A brand's names, logo, description or visibility changed."""

    __version__ = 1

    brand_id: Identifier(required=True)
    name: String(required=True)
    name_en: String()
    is_active: Boolean()


@catalogue.event(part_of="Brand")
class BrandDeactivated:
    """A brand was soft deleted."""

    __version__ = 1

    brand_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
