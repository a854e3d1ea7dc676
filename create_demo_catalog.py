"""Скрипт для создания демо-каталога (Electronics, Books, Toys)."""
import argparse
import asyncio
from decimal import Decimal

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from app.config import settings
from app.core.selection import SelectionLimitExceededError
from app.services.business_service import BusinessService
from app.services.category_service import CategoryService
from app.services.product_service import ProductService
from app.services.setting_service import SettingService

DEMO_CATEGORIES = ["Electronics", "Books", "Toys"]

DEMO_PRODUCTS = [
    {"title": "E-reader", "price": Decimal("129.00"), "categories": ["Electronics", "Books"]},
    {"title": "Robot kit", "price": Decimal("59.90"), "categories": ["Electronics", "Toys"]},
    {"title": "Picture book", "price": Decimal("12.50"), "categories": ["Books"]},
]


async def create_demo_catalog(business_slug: str):
    """Создать демо-категории и товары для существующего бизнеса."""
    engine = create_async_engine(settings.database_url, echo=False)
    async_session = async_sessionmaker(engine, expire_on_commit=False)

    async with async_session() as db:
        business = await BusinessService(db).get_by_slug(business_slug)
        if not business:
            print(f"❌ Бизнес '{business_slug}' не найден! Сначала запустите create_admin_user.py")
            await engine.dispose()
            return

        max_items = await SettingService(db).get_max_product_categories(business.id)
        print(f"✅ Бизнес: {business.name}, лимит категорий на товар: {max_items}")

        category_service = CategoryService(db)
        categories = {}
        for position, name in enumerate(DEMO_CATEGORIES):
            category = await category_service.create(business_id=business.id, name=name, position=position)
            categories[name] = category.id
            print(f"📁 Категория: {name}")

        product_service = ProductService(db)
        for item in DEMO_PRODUCTS:
            try:
                product = await product_service.create(
                    business_id=business.id,
                    title=item["title"],
                    price=item["price"],
                    category_ids=[categories[name] for name in item["categories"]],
                )
            except SelectionLimitExceededError as e:
                print(f"⚠️  {item['title']}: {e}")
                continue
            print(f"📦 Товар: {product.title} ({', '.join(item['categories'])})")

    await engine.dispose()


async def main():
    parser = argparse.ArgumentParser(description='Создать демо-каталог')
    parser.add_argument('--business-slug', default='default-business', help='Slug бизнеса')
    args = parser.parse_args()
    await create_demo_catalog(args.business_slug)


if __name__ == '__main__':
    asyncio.run(main())
