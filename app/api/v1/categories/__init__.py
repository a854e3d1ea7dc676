"""Categories API."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from typing import List
from datetime import datetime
import uuid

from app.database import get_db
from app.core.cache import cache_service, get_cache_key_categories
from app.models.category import Category
from app.services.business_service import BusinessService
from app.services.category_service import CategoryService

router = APIRouter()


class CategoryResponse(BaseModel):
    """Ответ с информацией о категории."""

    id: uuid.UUID
    name: str
    position: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        position=category.position,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


@router.get("/{business_slug}/categories", response_model=List[CategoryResponse])
async def get_categories(
    business_slug: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Получить список категорий бизнеса.
    """
    cache_key = get_cache_key_categories(business_slug)
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [CategoryResponse(**item) for item in cached]

    business = await BusinessService(db).get_by_slug(business_slug)
    if not business:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Бизнес с slug '{business_slug}' не найден",
        )

    categories = await CategoryService(db).get_by_business_id(business.id)
    result = [category_to_response(category) for category in categories]

    # TTL 60 секунд
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in result], ttl=60)

    return result
