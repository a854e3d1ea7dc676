"""Админ API настроек каталога."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from app.core.auth import get_admin_business
from app.database import get_db
from app.models.business import Business
from app.services.setting_service import SettingService

router = APIRouter()


class MaxProductCategoriesSetting(BaseModel):
    """Лимит категорий для одного товара."""

    max_items: int


@router.get(
    "/{business_slug}/settings/max-product-categories",
    response_model=MaxProductCategoriesSetting,
)
async def get_max_product_categories(
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """Текущий лимит категорий (настройка бизнеса или значение по умолчанию)."""
    max_items = await SettingService(db).get_max_product_categories(business.id)
    return MaxProductCategoriesSetting(max_items=max_items)


@router.put(
    "/{business_slug}/settings/max-product-categories",
    response_model=MaxProductCategoriesSetting,
)
async def set_max_product_categories(
    request: MaxProductCategoriesSetting,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Изменить лимит категорий для товаров бизнеса.

    Уже сохраненные товары не меняются, лимит применяется при следующем сохранении.
    """
    try:
        max_items = await SettingService(db).set_max_product_categories(business.id, request.max_items)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return MaxProductCategoriesSetting(max_items=max_items)
