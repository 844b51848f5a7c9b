"""Brand aggregate — a flat, soft-deletable list of product makers."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from catalogue.domain import catalogue


def normalize_name(name):
    """Comparison key under which brand names must be unique."""
    return (name or "").strip().casefold()


@catalogue.aggregate
class Brand:
    """A product maker. Names are unique across active and inactive brands."""

    name: String(required=True, max_length=100)
    name_key: String(required=True, max_length=100, unique=True)
    name_en: String(max_length=100)
    logo: String(max_length=500)
    description: Text()
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, name_en=None, logo=None, description=None, is_active=True):
        from catalogue.brand.events import BrandCreated

        now = datetime.now()
        brand = cls(
            name=name,
            name_key=normalize_name(name),
            name_en=name_en,
            logo=logo,
            description=description,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        brand.raise_(BrandCreated(brand_id=brand.id, name=name, name_en=name_en))
        return brand

    def update_details(self, name=None, name_en=None, logo=None, description=None, is_active=None):
        from catalogue.brand.events import BrandDetailsUpdated

        if name is not None:
            self.name = name
            self.name_key = normalize_name(name)
        if name_en is not None:
            self.name_en = name_en
        if logo is not None:
            self.logo = logo
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now()

        self.raise_(
            BrandDetailsUpdated(
                brand_id=self.id,
                name=self.name,
                name_en=self.name_en,
                is_active=self.is_active,
            )
        )

    def deactivate(self):
        from catalogue.brand.events import BrandDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Brand is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(BrandDeactivated(brand_id=self.id, deactivated_at=now))
