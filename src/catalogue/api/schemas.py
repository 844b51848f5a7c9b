"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Skincare",
                    "description": "Cleansers, serums and moisturizers.",
                    "image": "/media/skincare.jpg",
                    "sort_order": 1,
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool = True
    sort_order: int = 0


class UpdateCategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Skin Care", "is_active": True}]}}

    name: str | None = Field(None, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    sort_order: int | None = None


class ReorderCategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"sort_order": 3}]}}

    sort_order: int


class CreateSubcategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Serums", "sort_order": 2}]}}

    name: str = Field(..., max_length=100)
    slug: str | None = Field(None, max_length=120)
    is_active: bool = True
    sort_order: int = 0


class UpdateSubcategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Face Serums"}]}}

    name: str | None = Field(None, max_length=100)
    slug: str | None = Field(None, max_length=120)
    is_active: bool | None = None
    sort_order: int | None = None


class MoveSubcategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"category_id": "c3d4e5f6-a7b8-9012-cdef-123456789012"}]}}

    category_id: str


# --- Brand Request Schemas ---


class CreateBrandRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Acme Cosmetics",
                    "name_en": "Acme Cosmetics",
                    "logo": "/media/acme.png",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    name_en: str | None = Field(None, max_length=100)
    logo: str | None = Field(None, max_length=500)
    description: str | None = None
    is_active: bool = True


class UpdateBrandRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"logo": "/media/acme-2026.png"}]}}

    name: str | None = Field(None, max_length=100)
    name_en: str | None = Field(None, max_length=100)
    logo: str | None = Field(None, max_length=500)
    description: str | None = None
    is_active: bool | None = None


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Hydrating Serum",
                    "description": "Hyaluronic acid serum for daily use.",
                    "base_price": 280000,
                    "category_id": "c3d4e5f6-a7b8-9012-cdef-123456789012",
                    "images": ["/media/serum-front.jpg", "/media/serum-back.jpg"],
                    "tags": ["hydrating", "vegan"],
                    "specifications": {"volume": "30ml"},
                    "is_featured": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    base_price: int = Field(..., ge=0)
    category_id: str
    subcategory_id: str | None = None
    brand_id: str | None = None
    # Lists and maps may also arrive JSON-encoded as strings
    images: list[str] | str | None = None
    tags: list[str] | str | None = None
    specifications: dict[str, Any] | str | None = None
    is_featured: bool = False
    is_active: bool = True
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)


class UpdateProductRequest(BaseModel):
    """Sending ``subcategory_id`` or ``brand_id`` as null clears the reference."""

    model_config = {"json_schema_extra": {"examples": [{"base_price": 295000, "tags": ["hydrating"]}]}}

    name: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    base_price: int | None = Field(None, ge=0)
    category_id: str | None = None
    subcategory_id: str | None = None
    brand_id: str | None = None
    images: list[str] | str | None = None
    tags: list[str] | str | None = None
    specifications: dict[str, Any] | str | None = None
    is_featured: bool | None = None
    is_active: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)


class AddVariantRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "30ml",
                    "sku": "SERUM-30",
                    "price": 280000,
                    "stock": 10,
                    "size": "30ml",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    sku: str = Field(..., max_length=50)
    price: int = Field(..., ge=0)
    compare_price: int | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    color: str | None = Field(None, max_length=50)
    color_code: str | None = Field(None, max_length=20)
    size: str | None = Field(None, max_length=50)
    image: str | None = Field(None, max_length=500)
    is_default: bool | None = None


class UpdateVariantRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"stock": 25, "is_default": True}]}}

    name: str | None = Field(None, max_length=100)
    sku: str | None = Field(None, max_length=50)
    price: int | None = Field(None, ge=0)
    compare_price: int | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    color: str | None = Field(None, max_length=50)
    color_code: str | None = Field(None, max_length=20)
    size: str | None = Field(None, max_length=50)
    image: str | None = Field(None, max_length=500)
    is_default: bool | None = None
    is_active: bool | None = None


# --- Response Schemas ---


class IdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"id": "b2c3d4e5-f6a7-8901-bcde-f12345678901"}]}}

    id: str


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class UploadResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"url": "/media/3f2a9c.jpg", "thumbnail_url": None}]}}

    url: str
    thumbnail_url: str | None = None
