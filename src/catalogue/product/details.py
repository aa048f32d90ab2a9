"""Product updates: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.photo import save_photo
from catalogue.product.product import Product
from catalogue.shared.photo import decode_photo
from catalogue.shared.uniqueness import add_with_unique_name, ensure_name_available


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float()
    quantity: Integer()
    category_id: Identifier()
    shipping: Boolean(default=False)
    photo_data: Text()
    photo_content_type: String(max_length=50)


@catalogue.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        photo = None
        if command.photo_data:
            photo = decode_photo(command.photo_data, command.photo_content_type)

        product.update(
            name=command.name,
            description=command.description,
            price=command.price,
            quantity=command.quantity,
            category_id=command.category_id,
            shipping=command.shipping,
        )
        if photo is not None:
            product.has_photo = True

        ensure_name_available(Product, product.name, exclude_id=product.id, label="Product name")
        add_with_unique_name(repo, product, label="Product name")

        if photo is not None:
            save_photo(product.id, photo, command.photo_content_type)
