"""Predicate-based reads shared by the catalogue repositories.

Criteria are protean lookup keyword arguments (``price__gte=10``,
``category_id__in=[...]``). An empty criteria dict matches every record.
All list reads are newest first; records created at the same instant keep
their insertion order.
"""

from protean.core.repository import BaseRepository

DEFAULT_ORDERING = "-created_at"


class CatalogueQueries(BaseRepository):
    def _query(self, criteria=None, exclude=None):
        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        if exclude:
            query = query.exclude(**exclude)
        return query

    def exists(self, **criteria) -> bool:
        return self.count(**criteria) > 0

    def count(self, **criteria) -> int:
        return self._query(criteria).all().total

    def find(self, criteria=None, offset=0, limit=None, exclude=None) -> list:
        """Return matching records, newest first.

        ``limit=None`` returns every match from ``offset`` on.
        """
        if offset < 0:
            return []

        query = self._query(criteria, exclude)
        if limit is None:
            limit = query.all().total - offset
        if limit <= 0:
            return []

        return query.order_by(DEFAULT_ORDERING).offset(offset).limit(limit).all().items

    def find_by_slug(self, slug):
        return self._query({"slug": slug}).all().first
