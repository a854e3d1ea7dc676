"""Сервис для работы с категориями."""
from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.models.category import Category


class CategoryService:
    """Сервис для работы с категориями."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_business_id(self, business_id: UUID) -> list[Category]:
        """Получить все категории бизнеса."""
        stmt = select(Category).where(
            Category.business_id == business_id
        ).order_by(Category.position, Category.name)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, category_id: UUID) -> Category | None:
        """Получить категорию по ID."""
        return await self.db.get(Category, category_id)

    async def get_existing_ids(self, business_id: UUID, category_ids: list[UUID]) -> set[UUID]:
        """Какие из переданных ID являются категориями этого бизнеса."""
        if not category_ids:
            return set()
        stmt = select(Category.id).where(
            Category.business_id == business_id,
            Category.id.in_(category_ids),
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def create(self, business_id: UUID, name: str, position: int = 0) -> Category:
        """Создать новую категорию."""
        category = Category(business_id=business_id, name=name, position=position)
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def update(
        self,
        category_id: UUID,
        name: str | None = None,
        position: int | None = None,
    ) -> Category | None:
        """Обновить категорию."""
        category = await self.get_by_id(category_id)
        if not category:
            return None

        if name is not None:
            category.name = name
        if position is not None:
            category.position = position

        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def delete(self, category_id: UUID) -> bool:
        """Удалить категорию. Связи с продуктами удаляет ON DELETE CASCADE."""
        stmt = sql_delete(Category).where(Category.id == category_id)
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0
