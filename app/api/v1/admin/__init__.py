"""Админ API."""
from fastapi import APIRouter
from app.api.v1.admin import auth, products, categories, settings

router = APIRouter()
router.include_router(auth.router)
router.include_router(products.router)
router.include_router(categories.router)
router.include_router(settings.router)
