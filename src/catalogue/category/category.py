"""Category aggregate root — the top level of the two-level catalogue hierarchy."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Category:
    """A storefront grouping of products, addressable by a unique slug.

    Categories own subcategories (see ``Subcategory``) and are never hard
    deleted: deactivation hides them from listings while subcategories and
    products that reference them stay readable for historical integrity.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, slug, description=None, image=None, is_active=True, sort_order=0):
        from catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug,
            description=description,
            image=image,
            is_active=is_active,
            sort_order=sort_order or 0,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
                sort_order=category.sort_order,
            )
        )
        return category

    def update_details(self, name=None, slug=None, description=None, image=None, is_active=None):
        from catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                is_active=self.is_active,
            )
        )

    def reorder(self, new_sort_order):
        from catalogue.category.events import CategoryReordered

        previous_order = self.sort_order
        self.sort_order = new_sort_order
        self.updated_at = datetime.now()

        self.raise_(
            CategoryReordered(
                category_id=self.id,
                previous_order=previous_order,
                new_order=new_sort_order,
            )
        )

    def deactivate(self):
        from catalogue.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Category is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            CategoryDeactivated(
                category_id=self.id,
                deactivated_at=now,
            )
        )
