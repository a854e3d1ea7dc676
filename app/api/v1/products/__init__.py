"""Products API."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from typing import List
import uuid

from app.database import get_db
from app.core.cache import cache_service, get_cache_key_products
from app.models.product import Product
from app.services.business_service import BusinessService
from app.services.product_service import ProductService

router = APIRouter()


class ProductResponse(BaseModel):
    """Ответ с информацией о продукте."""

    id: uuid.UUID
    title: str
    description: str | None = None
    price: float
    currency: str
    sku: str | None = None
    is_active: bool
    category_ids: List[uuid.UUID] = []


def product_to_response(product: Product) -> ProductResponse:
    """Собрать ответ из модели (категории должны быть загружены)."""
    return ProductResponse(
        id=product.id,
        title=product.title,
        description=product.description,
        price=float(product.price),
        currency=product.currency,
        sku=product.sku,
        is_active=product.is_active,
        category_ids=[category.id for category in product.categories],
    )


@router.get("/{business_slug}/products", response_model=List[ProductResponse])
async def get_products(
    business_slug: str,
    category: uuid.UUID | None = None,
    page: int = 1,
    limit: int = 20,
    db: AsyncSession = Depends(get_db),
):
    """
    Получить список активных продуктов бизнеса.

    Параметры:
    - category: фильтр по категории
    - page: номер страницы
    - limit: количество элементов на странице
    """
    cache_key = get_cache_key_products(business_slug, str(category) if category else None, page, limit)
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [ProductResponse(**item) for item in cached]

    business = await BusinessService(db).get_by_slug(business_slug)
    if not business:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Бизнес с slug '{business_slug}' не найден",
        )

    products = await ProductService(db).get_by_business_id(
        business_id=business.id,
        category_id=category,
        page=page,
        limit=limit,
    )
    result = [product_to_response(product) for product in products]

    # TTL 5 минут
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in result], ttl=300)

    return result


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """
    Получить продукт по ID.
    """
    product = await ProductService(db).get_by_id(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Продукт с ID '{product_id}' не найден",
        )

    return product_to_response(product)
