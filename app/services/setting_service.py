"""Сервис для работы с настройками."""
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.config import settings
from app.core.selection import check_max_items
from app.models.setting import Setting

logger = logging.getLogger(__name__)

MAX_PRODUCT_CATEGORIES_KEY = "max_product_categories"


class SettingService:
    """Сервис для работы с настройками."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_key(self, business_id: UUID, key: str) -> dict | None:
        """Получить настройку по ключу."""
        stmt = select(Setting).where(
            Setting.business_id == business_id,
            Setting.key == key,
        )
        result = await self.db.execute(stmt)
        setting = result.scalar_one_or_none()

        return setting.value if setting else None

    async def set(self, business_id: UUID, key: str, value: dict) -> Setting:
        """Установить настройку."""
        stmt = select(Setting).where(
            Setting.business_id == business_id,
            Setting.key == key,
        )
        result = await self.db.execute(stmt)
        setting = result.scalar_one_or_none()

        if setting:
            setting.value = value
        else:
            setting = Setting(business_id=business_id, key=key, value=value)
            self.db.add(setting)

        await self.db.commit()
        await self.db.refresh(setting)
        return setting

    async def get_value(self, business_id: UUID, key: str, default: Any = None) -> Any:
        """Получить значение настройки с дефолтным значением."""
        setting_value = await self.get_by_key(business_id, key)
        if setting_value is None:
            return default
        # Значение хранится как {"value": ...}
        if isinstance(setting_value, dict) and "value" in setting_value:
            return setting_value["value"]
        return setting_value

    async def get_max_product_categories(self, business_id: UUID) -> int:
        """Сколько категорий можно выбрать для товара этого бизнеса."""
        value = await self.get_value(
            business_id, MAX_PRODUCT_CATEGORIES_KEY, settings.max_product_categories
        )
        return int(value)

    async def set_max_product_categories(self, business_id: UUID, max_items: int) -> int:
        """
        Установить лимит категорий для товаров бизнеса.

        Уже сохраненные товары не изменяются: новый лимит действует
        при следующем сохранении формы.
        """
        check_max_items(max_items)
        await self.set(business_id, MAX_PRODUCT_CATEGORIES_KEY, {"value": max_items})
        logger.info(f"Business {business_id}: max_product_categories set to {max_items}")
        return max_items
