"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CategoryNameRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Electronics"}]}}

    name: str | None = Field(None, max_length=100)


class PhotoUpload(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"data": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4nGNgYGD4DwABBAEAwS2OUAAAAABJRU5ErkJggg==", "content_type": "image/png"}]
        }
    }

    data: str
    content_type: str = Field(..., max_length=50)


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Noise Cancelling Headphones",
                    "description": "Over-ear wireless headphones with 30 hours of battery.",
                    "price": 199.0,
                    "quantity": 25,
                    "category_id": "4c1f7a43-5b3e-4e76-a8a8-1f5c0b1e9d2a",
                    "shipping": True,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)
    category_id: str | None = None
    shipping: bool = False
    photo: PhotoUpload | None = None


class ProductFilterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"checked": ["4c1f7a43-5b3e-4e76-a8a8-1f5c0b1e9d2a"], "radio": [0, 19.99], "page": 1}]
        }
    }

    checked: list[str] = Field(default_factory=list)
    # Shape is checked by the filter builder so a bad range reads "Invalid radio field"
    radio: Any = None
    page: int = 1


# --- Response Schemas ---


class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    created_at: datetime | None = None


class CategoryEnvelope(StatusResponse):
    category: CategoryResponse


class CategoryListResponse(StatusResponse):
    category: list[CategoryResponse]


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    price: float
    quantity: int
    shipping: bool
    has_photo: bool
    category: CategoryResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductEnvelope(StatusResponse):
    product: ProductResponse


class ProductListResponse(StatusResponse):
    total: int
    products: list[ProductResponse]


class ProductPageResponse(StatusResponse):
    products: list[ProductResponse]
    total: int
    page: int
    pages: int


class ProductCountResponse(StatusResponse):
    total: int


class CategoryProductsResponse(StatusResponse):
    category: CategoryResponse
    products: list[ProductResponse]


class ProductIdResponse(StatusResponse):
    product_id: str
