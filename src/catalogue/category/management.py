"""Category management: commands and handlers."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue, logger
from catalogue.shared.uniqueness import add_with_unique_name, ensure_name_available
from shared.errors import ConflictError


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(max_length=100)


@catalogue.command(part_of="Category")
class RenameCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)


@catalogue.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name)
        ensure_name_available(Category, category.name, label="Category")

        add_with_unique_name(current_domain.repository_for(Category), category, label="Category")

        logger.info("category_created", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(RenameCategory)
    def rename_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        category.rename(command.name)
        ensure_name_available(Category, category.name, exclude_id=category.id, label="Category")

        add_with_unique_name(repo, category, label="Category")

    @handle(DeleteCategory)
    def delete_category(self, command):
        """Delete a category unless products still point at it.

        The product check runs first: an id that is both unknown and
        referenced by products is reported as a conflict.
        """
        from catalogue.product.product import Product

        products = current_domain.repository_for(Product)
        if products.exists(category_id=command.category_id):
            logger.info("category_delete_blocked", category_id=str(command.category_id))
            raise ConflictError("Category still has products")

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo.delete(category)
        logger.info("category_deleted", category_id=str(command.category_id))
