"""Read models: plain dict views of catalogue aggregates for query results."""


def category_summary(category):
    if category is None:
        return None
    return {"id": str(category.id), "name": category.name, "slug": category.slug}


def subcategory_summary(subcategory):
    if subcategory is None:
        return None
    return {
        "id": str(subcategory.id),
        "name": subcategory.name,
        "slug": subcategory.slug,
        "category_id": str(subcategory.category_id),
    }


def brand_summary(brand):
    if brand is None:
        return None
    return {
        "id": str(brand.id),
        "name": brand.name,
        "name_en": brand.name_en,
        "logo": brand.logo,
    }


def variant_view(variant):
    return {
        "id": str(variant.id),
        "name": variant.name,
        "sku": variant.sku,
        "color": variant.color,
        "color_code": variant.color_code,
        "size": variant.size,
        "price": variant.price,
        "compare_price": variant.compare_price,
        "stock": variant.stock,
        "image": variant.image,
        "is_default": variant.is_default,
        "is_active": variant.is_active,
        "created_at": variant.created_at,
    }


def product_card(product, category=None, subcategory=None, brand=None):
    """Listing view of a product with every derived field."""
    return {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "base_price": product.base_price,
        "effective_price": product.effective_price,
        "min_price": product.min_price,
        "total_stock": product.total_stock,
        "has_variants": product.has_variants,
        "variant_count": product.variant_count,
        "primary_image": product.primary_image,
        "images": product.image_list,
        "tags": product.tag_list,
        "is_featured": product.is_featured,
        "is_active": product.is_active,
        "rating": product.rating,
        "review_count": product.review_count,
        "category_id": str(product.category_id),
        "subcategory_id": str(product.subcategory_id) if product.subcategory_id else None,
        "brand_id": str(product.brand_id) if product.brand_id else None,
        "category": category_summary(category),
        "subcategory": subcategory_summary(subcategory),
        "brand": brand_summary(brand),
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def ordered_variants(product):
    """Active variants, default first, then in creation order."""
    return sorted(product.active_variants, key=lambda v: not v.is_default)
