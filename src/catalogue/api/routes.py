"""FastAPI endpoints for the Catalogue domain.

Reads are public. Every write requires an admin principal.
"""

import json

from fastapi import APIRouter, Depends, File, UploadFile
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddVariantRequest,
    CreateBrandRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    CreateSubcategoryRequest,
    IdResponse,
    MoveSubcategoryRequest,
    ReorderCategoryRequest,
    StatusResponse,
    UpdateBrandRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
    UpdateSubcategoryRequest,
    UpdateVariantRequest,
    UploadResponse,
)
from catalogue.brand import queries as brand_queries
from catalogue.brand.management import CreateBrand, DeactivateBrand, UpdateBrand
from catalogue.category import queries as category_queries
from catalogue.category.management import (
    CreateCategory,
    DeactivateCategory,
    ReorderCategory,
    UpdateCategory,
)
from catalogue.category.subcategories import (
    CreateSubcategory,
    DeactivateSubcategory,
    MoveSubcategory,
    UpdateSubcategory,
)
from catalogue.product import queries as product_queries
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.lifecycle import DeactivateProduct
from catalogue.product.variants import AddVariant, DeactivateVariant, SetDefaultVariant, UpdateVariant
from shared.auth import require_admin
from shared.identifiers import retry_on_collision
from shared.media import get_image_store

admin_only = [Depends(require_admin)]

category_router = APIRouter(prefix="/categories", tags=["categories"])
subcategory_router = APIRouter(prefix="/subcategories", tags=["categories"])
brand_router = APIRouter(prefix="/brands", tags=["brands"])
product_router = APIRouter(prefix="/products", tags=["products"])
upload_router = APIRouter(prefix="/uploads", tags=["uploads"])


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _encode(value):
    """Forward JSON-encoded strings untouched; encode lists and maps."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


# --- Category endpoints ---


@category_router.get("")
async def list_categories() -> list[dict]:
    return category_queries.list_categories()


@category_router.get("/{identifier}")
async def get_category(identifier: str) -> dict:
    return category_queries.get_category(identifier)


@category_router.get("/{category_id}/subcategories")
async def list_subcategories(category_id: str) -> list[dict]:
    return category_queries.list_subcategories(category_id)


@category_router.post("", status_code=201, response_model=IdResponse, dependencies=admin_only)
async def create_category(body: CreateCategoryRequest) -> IdResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        image=body.image,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    result = retry_on_collision(lambda: _process(command), field="slug")
    return IdResponse(id=result)


@category_router.put("/{category_id}", response_model=StatusResponse, dependencies=admin_only)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        image=body.image,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    retry_on_collision(lambda: _process(command), field="slug")
    return StatusResponse()


@category_router.put("/{category_id}/reorder", response_model=StatusResponse, dependencies=admin_only)
async def reorder_category(category_id: str, body: ReorderCategoryRequest) -> StatusResponse:
    _process(ReorderCategory(category_id=category_id, sort_order=body.sort_order))
    return StatusResponse()


@category_router.put("/{category_id}/deactivate", response_model=StatusResponse, dependencies=admin_only)
async def deactivate_category(category_id: str) -> StatusResponse:
    _process(DeactivateCategory(category_id=category_id))
    return StatusResponse()


@category_router.post(
    "/{category_id}/subcategories", status_code=201, response_model=IdResponse, dependencies=admin_only
)
async def create_subcategory(category_id: str, body: CreateSubcategoryRequest) -> IdResponse:
    command = CreateSubcategory(
        category_id=category_id,
        name=body.name,
        slug=body.slug,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    result = retry_on_collision(lambda: _process(command), field="slug")
    return IdResponse(id=result)


# --- Subcategory endpoints ---


@subcategory_router.get("/{subcategory_id}")
async def get_subcategory(subcategory_id: str) -> dict:
    return category_queries.get_subcategory(subcategory_id)


@subcategory_router.put("/{subcategory_id}", response_model=StatusResponse, dependencies=admin_only)
async def update_subcategory(subcategory_id: str, body: UpdateSubcategoryRequest) -> StatusResponse:
    command = UpdateSubcategory(
        subcategory_id=subcategory_id,
        name=body.name,
        slug=body.slug,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    retry_on_collision(lambda: _process(command), field="slug")
    return StatusResponse()


@subcategory_router.put("/{subcategory_id}/move", response_model=StatusResponse, dependencies=admin_only)
async def move_subcategory(subcategory_id: str, body: MoveSubcategoryRequest) -> StatusResponse:
    command = MoveSubcategory(subcategory_id=subcategory_id, category_id=body.category_id)
    retry_on_collision(lambda: _process(command), field="slug")
    return StatusResponse()


@subcategory_router.put("/{subcategory_id}/deactivate", response_model=StatusResponse, dependencies=admin_only)
async def deactivate_subcategory(subcategory_id: str) -> StatusResponse:
    _process(DeactivateSubcategory(subcategory_id=subcategory_id))
    return StatusResponse()


# --- Brand endpoints ---


@brand_router.get("")
async def list_brands() -> list[dict]:
    return brand_queries.list_brands()


@brand_router.get("/{brand_id}")
async def get_brand(brand_id: str) -> dict:
    return brand_queries.get_brand(brand_id)


@brand_router.post("", status_code=201, response_model=IdResponse, dependencies=admin_only)
async def create_brand(body: CreateBrandRequest) -> IdResponse:
    command = CreateBrand(
        name=body.name,
        name_en=body.name_en,
        logo=body.logo,
        description=body.description,
        is_active=body.is_active,
    )
    # A name clash surfacing only at commit is re-checked, and reported, on retry
    result = retry_on_collision(lambda: _process(command), field="name_key")
    return IdResponse(id=result)


@brand_router.put("/{brand_id}", response_model=StatusResponse, dependencies=admin_only)
async def update_brand(brand_id: str, body: UpdateBrandRequest) -> StatusResponse:
    command = UpdateBrand(
        brand_id=brand_id,
        name=body.name,
        name_en=body.name_en,
        logo=body.logo,
        description=body.description,
        is_active=body.is_active,
    )
    retry_on_collision(lambda: _process(command), field="name_key")
    return StatusResponse()


@brand_router.put("/{brand_id}/deactivate", response_model=StatusResponse, dependencies=admin_only)
async def deactivate_brand(brand_id: str) -> StatusResponse:
    _process(DeactivateBrand(brand_id=brand_id))
    return StatusResponse()


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    category: str | None = None,
    subcategory: str | None = None,
    brand: str | None = None,
    featured: bool = False,
    min_price: int | None = None,
    max_price: int | None = None,
    in_stock: bool = False,
    tag: str | None = None,
    page: int = 1,
    limit: int = product_queries.DEFAULT_PAGE_SIZE,
) -> dict:
    return product_queries.list_products(
        category_id=category,
        subcategory_id=subcategory,
        brand_id=brand,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        tag=tag,
        page=page,
        limit=limit,
    )


@product_router.get("/{identifier}")
async def get_product(identifier: str) -> dict:
    return product_queries.get_product(identifier)


@product_router.post("", status_code=201, response_model=IdResponse, dependencies=admin_only)
async def create_product(body: CreateProductRequest) -> IdResponse:
    command = CreateProduct(
        name=body.name,
        slug=body.slug,
        description=body.description,
        base_price=body.base_price,
        category_id=body.category_id,
        subcategory_id=body.subcategory_id,
        brand_id=body.brand_id,
        images=_encode(body.images),
        tags=_encode(body.tags),
        specifications=_encode(body.specifications),
        is_featured=body.is_featured,
        is_active=body.is_active,
        rating=body.rating,
        review_count=body.review_count,
    )
    result = retry_on_collision(lambda: _process(command), field="slug")
    return IdResponse(id=result)


@product_router.put("/{product_id}", response_model=StatusResponse, dependencies=admin_only)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    supplied = body.model_fields_set
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        base_price=body.base_price,
        category_id=body.category_id,
        subcategory_id=body.subcategory_id,
        brand_id=body.brand_id,
        clear_subcategory="subcategory_id" in supplied and body.subcategory_id is None,
        clear_brand="brand_id" in supplied and body.brand_id is None,
        images=_encode(body.images),
        tags=_encode(body.tags),
        specifications=_encode(body.specifications),
        is_featured=body.is_featured,
        is_active=body.is_active,
        rating=body.rating,
        review_count=body.review_count,
    )
    retry_on_collision(lambda: _process(command), field="slug")
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse, dependencies=admin_only)
async def deactivate_product(product_id: str) -> StatusResponse:
    _process(DeactivateProduct(product_id=product_id))
    return StatusResponse()


# --- Variant endpoints ---


@product_router.get("/{product_id}/variants")
async def list_variants(product_id: str) -> list[dict]:
    return product_queries.list_variants(product_id)


@product_router.get("/{product_id}/variants/{variant_id}")
async def get_variant(product_id: str, variant_id: str) -> dict:
    return product_queries.get_variant(product_id, variant_id)


@product_router.post(
    "/{product_id}/variants", status_code=201, response_model=IdResponse, dependencies=admin_only
)
async def add_variant(product_id: str, body: AddVariantRequest) -> IdResponse:
    command = AddVariant(
        product_id=product_id,
        name=body.name,
        sku=body.sku,
        price=body.price,
        compare_price=body.compare_price,
        stock=body.stock,
        color=body.color,
        color_code=body.color_code,
        size=body.size,
        image=body.image,
        is_default=body.is_default,
    )
    result = retry_on_collision(lambda: _process(command), field="sku")
    return IdResponse(id=result)


@product_router.put(
    "/{product_id}/variants/{variant_id}", response_model=StatusResponse, dependencies=admin_only
)
async def update_variant(product_id: str, variant_id: str, body: UpdateVariantRequest) -> StatusResponse:
    command = UpdateVariant(
        product_id=product_id,
        variant_id=variant_id,
        name=body.name,
        sku=body.sku,
        price=body.price,
        compare_price=body.compare_price,
        stock=body.stock,
        color=body.color,
        color_code=body.color_code,
        size=body.size,
        image=body.image,
        is_default=body.is_default,
        is_active=body.is_active,
    )
    retry_on_collision(lambda: _process(command), field="sku")
    return StatusResponse()


@product_router.put(
    "/{product_id}/variants/{variant_id}/default", response_model=StatusResponse, dependencies=admin_only
)
async def set_default_variant(product_id: str, variant_id: str) -> StatusResponse:
    _process(SetDefaultVariant(product_id=product_id, variant_id=variant_id))
    return StatusResponse()


@product_router.put(
    "/{product_id}/variants/{variant_id}/deactivate", response_model=StatusResponse, dependencies=admin_only
)
async def deactivate_variant(product_id: str, variant_id: str) -> StatusResponse:
    _process(DeactivateVariant(product_id=product_id, variant_id=variant_id))
    return StatusResponse()


# --- Uploads ---


@upload_router.post("", status_code=201, response_model=UploadResponse, dependencies=admin_only)
async def upload_image(file: UploadFile = File(...)) -> UploadResponse:
    data = await file.read()
    stored = get_image_store().store(data, file.filename or "")
    return UploadResponse(url=stored.url, thumbnail_url=stored.thumbnail_url)
