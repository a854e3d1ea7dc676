"""Админ API категорий."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
import uuid

from app.api.v1.categories import CategoryResponse, category_to_response
from app.core.auth import get_admin_business
from app.core.cache import cache_service, get_cache_key_categories, get_cache_pattern_products
from app.database import get_db
from app.models.business import Business
from app.services.category_service import CategoryService

router = APIRouter()


class CreateCategoryRequest(BaseModel):
    """Запрос на создание категории."""

    name: str
    position: int = 0


class UpdateCategoryRequest(BaseModel):
    """Запрос на обновление категории."""

    name: str | None = None
    position: int | None = None


async def invalidate_catalog_cache(business_slug: str) -> None:
    """Очистить кэш категорий и списков продуктов бизнеса."""
    await cache_service.delete(get_cache_key_categories(business_slug))
    await cache_service.delete_pattern(get_cache_pattern_products(business_slug))


async def get_business_category(
    category_id: uuid.UUID,
    business: Business,
    service: CategoryService,
):
    category = await service.get_by_id(category_id)
    if not category or category.business_id != business.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Категория не найдена")
    return category


@router.post(
    "/{business_slug}/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CreateCategoryRequest,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """Создать новую категорию для бизнеса."""
    category = await CategoryService(db).create(
        business_id=business.id,
        name=request.name,
        position=request.position,
    )
    await invalidate_catalog_cache(business.slug)
    return category_to_response(category)


@router.put("/{business_slug}/categories/{category_id}", response_model=CategoryResponse)
@router.patch("/{business_slug}/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    request: UpdateCategoryRequest,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """Обновить категорию."""
    service = CategoryService(db)
    await get_business_category(category_id, business, service)

    category = await service.update(
        category_id=category_id,
        name=request.name,
        position=request.position,
    )
    await invalidate_catalog_cache(business.slug)
    return category_to_response(category)


@router.delete("/{business_slug}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Удалить категорию.

    Связи категории с продуктами удаляются вместе с ней.
    """
    service = CategoryService(db)
    await get_business_category(category_id, business, service)
    await service.delete(category_id)
    await invalidate_catalog_cache(business.slug)
