"""Attach an uploaded photo to a product."""

import base64

from protean.utils.globals import current_domain

from catalogue.product.product import ProductPhoto


def save_photo(product_id, data: bytes, content_type: str) -> None:
    """Store the photo for ``product_id``, replacing any previous one."""
    repo = current_domain.repository_for(ProductPhoto)
    encoded = base64.b64encode(data).decode("ascii")

    existing = repo._dao.query.filter(product_id=product_id).all().first
    if existing is None:
        repo.add(ProductPhoto(product_id=product_id, data=encoded, content_type=content_type))
        return

    existing.data = encoded
    existing.content_type = content_type
    repo.add(existing)
