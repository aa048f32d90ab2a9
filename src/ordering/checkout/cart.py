"""Cart deserialization and pricing.

The cart lives on the client and arrives with the payment request in one of
two encodings:

- legacy product snapshots, ``{"_id": ..., "name": ..., "price": ...}``,
  where every entry is one unit and repeats encode quantity;
- explicit lines, ``{"product_id": ..., "quantity": ..., "price": ...}``.

Both become ``CartLine`` values. Prices are taken from the cart as sent.
"""

import math
from dataclasses import dataclass
from numbers import Real

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class CartLine:
    product_id: str
    unit_price: float
    quantity: int = 1
    name: str | None = None

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...]

    @property
    def product_ids(self) -> list[str]:
        """Product ids in submitted order, one entry per unit."""
        return [line.product_id for line in self.lines for _ in range(line.quantity)]

    @property
    def total(self) -> float:
        return round(sum(line.subtotal for line in self.lines), 2)

    def grouped_items(self) -> list[dict]:
        """One item per product, quantities merged, first-seen order kept."""
        grouped: dict[str, dict] = {}
        for line in self.lines:
            item = grouped.get(line.product_id)
            if item is None:
                grouped[line.product_id] = {
                    "product_id": line.product_id,
                    "name": line.name,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                }
            else:
                item["quantity"] += line.quantity
        return list(grouped.values())


def _is_price(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0


def _parse_line(entry) -> CartLine:
    if not isinstance(entry, dict):
        raise ValidationError({"cart": ["Invalid cart item"]})

    price = entry.get("price")
    if not _is_price(price):
        raise ValidationError({"cart": ["Invalid price"]})

    if "product_id" in entry:
        product_id = entry["product_id"]
        quantity = entry.get("quantity", 1)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"cart": ["Invalid quantity"]})
    else:
        # Legacy snapshots carry the product's stock level as ``quantity``
        product_id = entry.get("_id") or entry.get("id")
        quantity = 1

    if not product_id:
        raise ValidationError({"cart": ["Cart item is missing a product id"]})

    return CartLine(product_id=str(product_id), unit_price=float(price), quantity=quantity, name=entry.get("name"))


def parse_cart(raw) -> Cart:
    """Validate a submitted cart. Fails on the first offending entry."""
    if not isinstance(raw, list) or not raw:
        raise ValidationError({"cart": ["Cart is required"]})
    return Cart(lines=tuple(_parse_line(entry) for entry in raw))
