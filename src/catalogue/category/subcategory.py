"""Subcategory aggregate — the second and last level of the catalogue hierarchy."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.aggregate
class Subcategory:
    """A grouping inside exactly one owning Category.

    Slugs are unique within the owning category only. The owning category
    can change only while no product references the subcategory; that check
    spans aggregates and lives in the handler.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    category_id: Identifier(required=True)
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, slug, category_id, is_active=True, sort_order=0):
        from catalogue.category.events import SubcategoryCreated

        now = datetime.now()
        subcategory = cls(
            name=name,
            slug=slug,
            category_id=category_id,
            is_active=is_active,
            sort_order=sort_order or 0,
            created_at=now,
            updated_at=now,
        )
        subcategory.raise_(
            SubcategoryCreated(
                subcategory_id=subcategory.id,
                category_id=category_id,
                name=name,
                slug=slug,
            )
        )
        return subcategory

    def update_details(self, name=None, slug=None, is_active=None, sort_order=None):
        from catalogue.category.events import SubcategoryDetailsUpdated

        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if is_active is not None:
            self.is_active = is_active
        if sort_order is not None:
            self.sort_order = sort_order

        self.updated_at = datetime.now()

        self.raise_(
            SubcategoryDetailsUpdated(
                subcategory_id=self.id,
                name=self.name,
                slug=self.slug,
                is_active=self.is_active,
            )
        )

    def move_to(self, category_id, slug):
        from catalogue.category.events import SubcategoryMoved

        if str(category_id) == str(self.category_id):
            raise ValidationError({"category_id": ["Subcategory already belongs to this category"]})

        previous_category_id = self.category_id
        self.category_id = category_id
        self.slug = slug
        self.updated_at = datetime.now()

        self.raise_(
            SubcategoryMoved(
                subcategory_id=self.id,
                previous_category_id=previous_category_id,
                new_category_id=category_id,
            )
        )

    def deactivate(self):
        from catalogue.category.events import SubcategoryDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Subcategory is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            SubcategoryDeactivated(
                subcategory_id=self.id,
                category_id=self.category_id,
                deactivated_at=now,
            )
        )
