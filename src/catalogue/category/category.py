"""Category aggregate root for product categorization."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from catalogue.domain import catalogue
from catalogue.shared.slug import name_key, slugify


@catalogue.aggregate
class Category:
    """A flat grouping of products in the storefront catalogue.

    Names are unique regardless of case. ``name_key`` holds the normalized
    name and carries the storage-level unique constraint, so two racing
    writers cannot both persist the same name.
    """

    name: String(required=True, max_length=100)
    name_key: String(required=True, max_length=100, unique=True)
    slug: String(required=True, max_length=200)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, created_at=None):
        from catalogue.category.events import CategoryCreated

        name = _clean_name(name)
        now = created_at or datetime.now(UTC)

        category = cls(
            name=name,
            name_key=name_key(name),
            slug=slugify(name),
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
            )
        )
        return category

    def rename(self, name):
        from catalogue.category.events import CategoryRenamed

        name = _clean_name(name)
        previous_name = self.name

        self.name = name
        self.name_key = name_key(name)
        self.slug = slugify(name)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryRenamed(
                category_id=self.id,
                previous_name=previous_name,
                name=self.name,
                slug=self.slug,
            )
        )


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["Name is required"]})
    return name
