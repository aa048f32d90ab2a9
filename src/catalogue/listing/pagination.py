"""Fixed-size page arithmetic for catalogue listings."""

import math
from dataclasses import dataclass, field

PER_PAGE = 6


def skip(page: int, per_page: int = PER_PAGE) -> int:
    return (page - 1) * per_page


def page_count(total: int, per_page: int = PER_PAGE) -> int:
    return math.ceil(total / per_page) if total > 0 else 0


@dataclass
class Page:
    products: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = PER_PAGE

    @property
    def pages(self) -> int:
        return page_count(self.total, self.per_page)
