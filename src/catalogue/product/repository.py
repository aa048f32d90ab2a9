"""Repositories for the Product and ProductPhoto aggregates."""

import base64

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product, ProductPhoto
from catalogue.shared.queries import CatalogueQueries


@catalogue.repository(part_of=Product)
class ProductRepository(CatalogueQueries):
    """Product reads. None of them carry photo bytes; use ``get_photo``."""

    def search(self, keyword: str) -> list[Product]:
        """Case-insensitive substring match on name or description, newest first."""
        by_name = self.find({"name__icontains": keyword})
        by_description = self.find({"description__icontains": keyword})

        seen = {product.id for product in by_name}
        merged = by_name + [product for product in by_description if product.id not in seen]
        return sorted(merged, key=lambda product: product.created_at, reverse=True)

    def related(self, product_id, category_id, limit: int = 3) -> list[Product]:
        return self.find({"category_id": category_id}, limit=limit, exclude={"id": product_id})

    def get_photo(self, product_id) -> tuple[bytes, str]:
        photo = current_domain.repository_for(ProductPhoto)._dao.query.filter(product_id=product_id).all().first
        if photo is None:
            raise ObjectNotFoundError("Photo not found")
        return base64.b64decode(photo.data), photo.content_type

    def delete(self, product: Product) -> None:
        photos = current_domain.repository_for(ProductPhoto)
        photo = photos._dao.query.filter(product_id=product.id).all().first
        if photo is not None:
            photos._dao.delete(photo)
        self._dao.delete(product)
