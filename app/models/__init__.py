"""Модели базы данных."""
from app.models.user import User
from app.models.business import Business
from app.models.product import Product
from app.models.category import Category
from app.models.product_category import product_categories
from app.models.setting import Setting

__all__ = [
    "User",
    "Business",
    "Product",
    "Category",
    "product_categories",
    "Setting",
]
