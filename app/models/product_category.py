"""Модель связи продукт-категория (M2M)."""
from sqlalchemy import ForeignKey, Table, Column

from app.database import Base

# Таблица для M2M связи: пара (product_id, category_id) уникальна, других колонок нет
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)
