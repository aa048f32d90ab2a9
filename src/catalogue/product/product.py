"""Product aggregate root and its separately stored photo."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.shared.photo import ALLOWED_CONTENT_TYPES
from catalogue.shared.slug import name_key, slugify


@catalogue.aggregate
class Product:
    """A purchasable catalogue item.

    ``category_id`` is expected to point at an existing Category, but only
    category deletion checks the link. Photo bytes live in ``ProductPhoto``
    so that listing and detail reads never load them.
    """

    name: String(required=True, max_length=255)
    name_key: String(required=True, max_length=255, unique=True)
    slug: String(required=True, max_length=300)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)
    shipping: Boolean(default=False)
    has_photo: Boolean(default=False)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def description_must_not_be_blank(self):
        if self.description is not None and not str(self.description).strip():
            raise ValidationError({"description": ["Product description is required"]})

    @classmethod
    def create(cls, name, description, price, quantity, category_id, shipping=False, created_at=None):
        from catalogue.product.events import ProductCreated

        name = _clean_name(name)
        now = created_at or datetime.now(UTC)

        product = cls(
            name=name,
            name_key=name_key(name),
            slug=slugify(name),
            description=description,
            price=price,
            quantity=quantity,
            category_id=category_id,
            shipping=bool(shipping),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                category_id=product.category_id,
                price=product.price,
                created_at=now,
            )
        )
        return product

    def update(self, name, description, price, quantity, category_id, shipping):
        """Replace the editable fields, mirroring the admin edit form."""
        from catalogue.product.events import ProductUpdated

        name = _clean_name(name)

        with atomic_change(self):
            self.name = name
            self.name_key = name_key(name)
            self.slug = slugify(name)
            self.description = description
            self.price = price
            self.quantity = quantity
            self.category_id = category_id
            self.shipping = bool(shipping)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                category_id=self.category_id,
                price=self.price,
            )
        )


@catalogue.aggregate
class ProductPhoto:
    """Raw photo bytes for one product, base64 encoded for storage."""

    product_id: Identifier(identifier=True, required=True)
    data: Text(required=True)
    content_type: String(required=True, max_length=50)

    @invariant.post
    def content_type_must_be_an_image(self):
        if self.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError({"photo": ["Only JPEG, PNG, or WebP images are allowed"]})


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["Product name is required"]})
    return name
