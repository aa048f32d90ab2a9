"""Filtered and paginated product listings.

A filter request narrows products by a set of category ids (``checked``)
and an inclusive price range (``radio``). Either may be absent; with
neither, every product matches.
"""

from numbers import Real

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.listing.pagination import PER_PAGE, Page, skip
from catalogue.product.product import Product


def _price_range(radio):
    if radio is None:
        return None
    if not isinstance(radio, list | tuple):
        raise ValidationError({"radio": ["Invalid radio field"]})
    if len(radio) == 0:
        return None
    if len(radio) != 2:
        raise ValidationError({"radio": ["Invalid radio field"]})

    low, high = radio
    for bound in (low, high):
        if isinstance(bound, bool) or not isinstance(bound, Real):
            raise ValidationError({"radio": ["Invalid radio field"]})
    return low, high


def build_product_criteria(checked=None, radio=None) -> dict:
    """Translate a filter request into protean lookup criteria.

    A ``low > high`` range is kept as-is and simply matches nothing.
    """
    criteria = {}
    if checked:
        criteria["category_id__in"] = list(checked)

    price_range = _price_range(radio)
    if price_range is not None:
        low, high = price_range
        criteria["price__gte"] = low
        criteria["price__lte"] = high
    return criteria


def filter_products(checked=None, radio=None, page: int = 1) -> Page:
    criteria = build_product_criteria(checked, radio)
    repo = current_domain.repository_for(Product)

    total = repo.count(**criteria)
    products = repo.find(criteria, offset=skip(page), limit=PER_PAGE) if page >= 1 else []

    logger.debug("products_filtered", criteria=sorted(criteria), total=total, page=page)
    return Page(products=products, total=total, page=page)


def list_page(page: int) -> Page:
    """Unfiltered listing page. Pages are 1-based."""
    if page <= 0:
        raise ValidationError({"page": ["Page must be a positive integer"]})
    return filter_products(page=page)
