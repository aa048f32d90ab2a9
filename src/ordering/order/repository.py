"""Repository for the Order aggregate. Every list read is newest first.

List reads pass ``limit(None)``; protean otherwise caps a result set at the
aggregate's default limit.
"""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def _newest_first(self, **criteria) -> list[Order]:
        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        return query.order_by("-created_at").limit(None).all().items

    def for_buyer(self, buyer_id) -> list[Order]:
        return self._newest_first(buyer_id=buyer_id)

    def find_all(self) -> list[Order]:
        return self._newest_first()

    def find_by_transaction(self, transaction_id) -> Order | None:
        return self._dao.query.filter(payment_transaction_id=transaction_id).all().first
