"""Repository for the Category aggregate."""

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.shared.queries import CatalogueQueries


@catalogue.repository(part_of=Category)
class CategoryRepository(CatalogueQueries):
    def find_all(self) -> list[Category]:
        return self.find()

    def delete(self, category: Category) -> None:
        self._dao.delete(category)
