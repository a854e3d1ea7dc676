"""API v1 роутеры."""
from fastapi import APIRouter

from app.api.v1 import admin, products, categories

router = APIRouter()

# Подключаем все роутеры
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
