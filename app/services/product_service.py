"""Сервис для работы с продуктами."""
from decimal import Decimal
from sqlalchemy import select, insert, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from uuid import UUID

from app.core.selection import validate_selection
from app.models.category import Category
from app.models.product import Product
from app.models.product_category import product_categories
from app.services.category_service import CategoryService
from app.services.setting_service import SettingService


class ProductService:
    """Сервис для работы с продуктами."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_business_id(
        self,
        business_id: UUID,
        category_id: UUID | None = None,
        page: int = 1,
        limit: int = 20,
        include_inactive: bool = False,
    ) -> list[Product]:
        """Получить продукты бизнеса с фильтрацией."""
        stmt = select(Product).options(
            selectinload(Product.categories)
        ).where(
            Product.business_id == business_id,
        )

        if not include_inactive:
            stmt = stmt.where(Product.is_active == True)  # noqa: E712

        if category_id:
            stmt = stmt.join(Product.categories).where(Category.id == category_id)

        offset = (page - 1) * limit
        stmt = stmt.order_by(Product.created_at, Product.title).offset(offset).limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, product_id: UUID) -> Product | None:
        """Получить продукт по ID вместе с категориями."""
        stmt = (
            select(Product)
            .options(selectinload(Product.categories))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def prepare_category_ids(self, business_id: UUID, category_ids: list[UUID]) -> list[UUID]:
        """
        Проверить выбранные категории перед сохранением.

        Дубликаты отбрасываются, количество уникальных категорий не должно
        превышать лимит бизнеса, все категории должны принадлежать бизнесу.

        Raises:
            SelectionLimitExceededError: Если выбрано больше категорий, чем разрешено
            ValueError: Если какая-то из категорий не найдена
        """
        max_items = await SettingService(self.db).get_max_product_categories(business_id)
        unique_ids = validate_selection(category_ids, max_items, attribute="category_ids")

        existing_ids = await CategoryService(self.db).get_existing_ids(business_id, unique_ids)
        missing = [str(category_id) for category_id in unique_ids if category_id not in existing_ids]
        if missing:
            raise ValueError(f"Категории не найдены: {', '.join(missing)}")

        return unique_ids

    async def _replace_categories(self, product_id: UUID, category_ids: list[UUID]) -> None:
        """Заменить набор категорий продукта."""
        await self.db.execute(
            delete(product_categories).where(product_categories.c.product_id == product_id)
        )
        if category_ids:
            await self.db.execute(
                insert(product_categories),
                [{"product_id": product_id, "category_id": category_id} for category_id in category_ids],
            )

    async def create(
        self,
        business_id: UUID,
        title: str,
        price: Decimal,
        currency: str = "RUB",
        description: str | None = None,
        sku: str | None = None,
        is_active: bool = True,
        category_ids: list[UUID] | None = None,
    ) -> Product:
        """Создать новый продукт."""
        # Проверяем категории до любых изменений в БД
        category_ids = await self.prepare_category_ids(business_id, category_ids or [])

        product = Product(
            business_id=business_id,
            title=title,
            description=description,
            price=price,
            currency=currency,
            sku=sku,
            is_active=is_active,
        )
        try:
            self.db.add(product)
            await self.db.flush()  # Получаем ID продукта
            product_id = product.id
            await self._replace_categories(product_id, category_ids)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return await self.get_by_id(product_id)

    async def update(
        self,
        product_id: UUID,
        title: str | None = None,
        description: str | None = None,
        price: Decimal | None = None,
        currency: str | None = None,
        sku: str | None = None,
        is_active: bool | None = None,
        category_ids: list[UUID] | None = None,
    ) -> Product | None:
        """
        Обновить продукт.

        category_ids=None оставляет категории без изменений, список
        (в том числе пустой) заменяет их целиком.
        """
        product = await self.get_by_id(product_id)
        if not product:
            return None

        if category_ids is not None:
            category_ids = await self.prepare_category_ids(product.business_id, category_ids)

        if title is not None:
            product.title = title
        if description is not None:
            product.description = description
        if price is not None:
            product.price = price
        if currency is not None:
            product.currency = currency
        if sku is not None:
            product.sku = sku
        if is_active is not None:
            product.is_active = is_active

        try:
            if category_ids is not None:
                await self._replace_categories(product_id, category_ids)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return await self.get_by_id(product_id)

    async def delete(self, product_id: UUID) -> bool:
        """Удалить продукт. Связи с категориями удаляет ON DELETE CASCADE."""
        result = await self.db.execute(delete(Product).where(Product.id == product_id))
        await self.db.commit()
        return result.rowcount > 0
