"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CategoryEnvelope,
    CategoryListResponse,
    CategoryNameRequest,
    CategoryProductsResponse,
    CategoryResponse,
    ProductCountResponse,
    ProductEnvelope,
    ProductFilterRequest,
    ProductIdResponse,
    ProductListResponse,
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
    StatusResponse,
)
from catalogue.category.category import Category
from catalogue.category.management import CreateCategory, DeleteCategory, RenameCategory
from catalogue.listing.filters import filter_products, list_page
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.product import Product
from catalogue.product.removal import DeleteProduct
from shared.auth import Identity, require_admin

category_router = APIRouter(prefix="/category", tags=["categories"])
product_router = APIRouter(prefix="/product", tags=["products"])


def _category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        created_at=category.created_at,
    )


def _product_responses(products: list[Product]) -> list[ProductResponse]:
    """Serialize products with their category embedded, one category read per page."""
    category_ids = {str(product.category_id) for product in products if product.category_id}
    categories = {}
    if category_ids:
        found = current_domain.repository_for(Category).find({"id__in": list(category_ids)})
        categories = {str(category.id): _category_response(category) for category in found}

    return [
        ProductResponse(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            shipping=bool(product.shipping),
            has_photo=bool(product.has_photo),
            category=categories.get(str(product.category_id)),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        for product in products
    ]


# --- Category endpoints ---


@category_router.get("/get-category", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    categories = current_domain.repository_for(Category).find_all()
    return CategoryListResponse(
        message="All categories",
        category=[_category_response(category) for category in categories],
    )


@category_router.get("/single-category/{slug}", response_model=CategoryEnvelope)
async def get_category(slug: str) -> CategoryEnvelope:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None:
        raise ObjectNotFoundError("Category not found")
    return CategoryEnvelope(message="Category found", category=_category_response(category))


@category_router.post("/create-category", status_code=201, response_model=CategoryEnvelope)
async def create_category(body: CategoryNameRequest, _: Identity = Depends(require_admin)) -> CategoryEnvelope:
    category_id = current_domain.process(CreateCategory(name=body.name), asynchronous=False)
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryEnvelope(message="New category created", category=_category_response(category))


@category_router.put("/update-category/{category_id}", response_model=CategoryEnvelope)
async def update_category(
    category_id: str, body: CategoryNameRequest, _: Identity = Depends(require_admin)
) -> CategoryEnvelope:
    current_domain.process(RenameCategory(category_id=category_id, name=body.name), asynchronous=False)
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryEnvelope(message="Category updated", category=_category_response(category))


@category_router.delete("/delete-category/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, _: Identity = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(message="Category deleted")


# --- Product endpoints ---


def _product_command_fields(body: ProductRequest) -> dict:
    fields = {
        "name": body.name,
        "description": body.description,
        "price": body.price,
        "quantity": body.quantity,
        "category_id": body.category_id,
        "shipping": body.shipping,
    }
    if body.photo is not None:
        fields["photo_data"] = body.photo.data
        fields["photo_content_type"] = body.photo.content_type
    return fields


@product_router.post("/create-product", status_code=201, response_model=ProductIdResponse)
async def create_product(body: ProductRequest, _: Identity = Depends(require_admin)) -> ProductIdResponse:
    product_id = current_domain.process(CreateProduct(**_product_command_fields(body)), asynchronous=False)
    return ProductIdResponse(message="Product created", product_id=product_id)


@product_router.put("/update-product/{product_id}", response_model=ProductEnvelope)
async def update_product(product_id: str, body: ProductRequest, _: Identity = Depends(require_admin)) -> ProductEnvelope:
    command = UpdateProduct(product_id=product_id, **_product_command_fields(body))
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(message="Product updated", product=_product_responses([product])[0])


@product_router.delete("/delete-product/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, _: Identity = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product deleted")


@product_router.get("/get-product", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    products = current_domain.repository_for(Product).find()
    return ProductListResponse(message="All products", total=len(products), products=_product_responses(products))


@product_router.get("/get-product/{slug}", response_model=ProductEnvelope)
async def get_product(slug: str) -> ProductEnvelope:
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return ProductEnvelope(message="Single product fetched", product=_product_responses([product])[0])


@product_router.get("/product-photo/{product_id}")
async def get_product_photo(product_id: str) -> Response:
    data, content_type = current_domain.repository_for(Product).get_photo(product_id)
    return Response(content=data, media_type=content_type)


@product_router.post("/product-filters", response_model=ProductPageResponse)
async def filter_product_page(body: ProductFilterRequest) -> ProductPageResponse:
    page = filter_products(checked=body.checked, radio=body.radio, page=body.page)
    return ProductPageResponse(
        products=_product_responses(page.products),
        total=page.total,
        page=page.page,
        pages=page.pages,
    )


@product_router.get("/product-count", response_model=ProductCountResponse)
async def count_products() -> ProductCountResponse:
    return ProductCountResponse(total=current_domain.repository_for(Product).count())


@product_router.get("/product-list/{page}", response_model=ProductPageResponse)
async def product_list_page(page: int) -> ProductPageResponse:
    result = list_page(page)
    return ProductPageResponse(
        products=_product_responses(result.products),
        total=result.total,
        page=result.page,
        pages=result.pages,
    )


@product_router.get("/search/{keyword}", response_model=ProductListResponse)
async def search_products(keyword: str) -> ProductListResponse:
    products = current_domain.repository_for(Product).search(keyword)
    return ProductListResponse(total=len(products), products=_product_responses(products))


@product_router.get("/related-product/{product_id}/{category_id}", response_model=ProductListResponse)
async def related_products(product_id: str, category_id: str) -> ProductListResponse:
    products = current_domain.repository_for(Product).related(product_id, category_id)
    return ProductListResponse(total=len(products), products=_product_responses(products))


@product_router.get("/product-category/{slug}", response_model=CategoryProductsResponse)
async def products_in_category(slug: str) -> CategoryProductsResponse:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None:
        raise ObjectNotFoundError("Category not found")

    products = current_domain.repository_for(Product).find({"category_id": category.id})
    return CategoryProductsResponse(category=_category_response(category), products=_product_responses(products))
