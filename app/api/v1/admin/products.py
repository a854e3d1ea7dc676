"""Админ API товаров: форма товара, создание, редактирование, удаление."""
import logging
from decimal import Decimal
from typing import Any, List
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from app.api.v1.admin.categories import invalidate_catalog_cache
from app.api.v1.products import ProductResponse, product_to_response
from app.core.auth import get_admin_business
from app.core.forms import add_to_selection, build_product_form, build_select_options
from app.core.selection import SelectionLimitExceededError
from app.database import get_db
from app.models.business import Business
from app.models.product import Product
from app.services.category_service import CategoryService
from app.services.product_service import ProductService
from app.services.setting_service import SettingService

logger = logging.getLogger(__name__)

router = APIRouter()


class SelectOption(BaseModel):
    """Опция multi-select поля."""

    value: uuid.UUID
    label: str
    selected: bool
    disabled: bool


class FormField(BaseModel):
    """Описание поля формы."""

    name: str
    type: str
    label: str
    required: bool = False
    value: Any = None
    multiple: bool = False
    max_items: int | None = None
    options: List[SelectOption] | None = None
    help_text: str | None = None


class FormSchemaResponse(BaseModel):
    """Схема формы для фронтенда админки."""

    fields: List[FormField]


class CategoryOptionsRequest(BaseModel):
    """Текущий выбор категорий в форме и (опционально) категория, которую добавляют."""

    category_ids: List[uuid.UUID] = []
    add: uuid.UUID | None = None


class CategoryOptionsResponse(BaseModel):
    """Состояние поля категорий с учетом лимита."""

    options: List[SelectOption]
    selected: List[uuid.UUID]
    max_items: int
    selected_count: int
    remaining: int
    can_add_more: bool
    accepted: bool = True


class CreateProductRequest(BaseModel):
    """Запрос на создание продукта."""

    title: str
    description: str | None = None
    price: Decimal
    currency: str = "RUB"
    sku: str | None = None
    is_active: bool = True
    # Лимит проверяется по уникальным ID в сервисе, а не через max_length списка
    category_ids: List[uuid.UUID] = []


class UpdateProductRequest(BaseModel):
    """Запрос на обновление продукта."""

    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    currency: str | None = None
    sku: str | None = None
    is_active: bool | None = None
    category_ids: List[uuid.UUID] | None = None


def selection_error(e: SelectionLimitExceededError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=e.to_detail(),
    )


async def get_category_choices(db: AsyncSession, business: Business) -> list[tuple[uuid.UUID, str]]:
    categories = await CategoryService(db).get_by_business_id(business.id)
    return [(category.id, category.name) for category in categories]


async def get_business_product(
    product_id: uuid.UUID,
    business: Business,
    service: ProductService,
) -> Product:
    product = await service.get_by_id(product_id)
    if not product or product.business_id != business.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Продукт с ID '{product_id}' не найден",
        )
    return product


@router.get("/{business_slug}/products/form", response_model=FormSchemaResponse)
async def get_product_form(
    product_id: uuid.UUID | None = None,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Схема формы товара.

    Без product_id - пустая форма создания, с product_id - форма
    редактирования с текущими значениями. Поле category_ids содержит
    max_items, и невыбранные опции отключены, если лимит уже достигнут.
    """
    values = None
    if product_id:
        product = await get_business_product(product_id, business, ProductService(db))
        values = {
            "title": product.title,
            "description": product.description,
            "price": float(product.price),
            "is_active": product.is_active,
            "category_ids": [category.id for category in product.categories],
        }

    max_items = await SettingService(db).get_max_product_categories(business.id)
    choices = await get_category_choices(db, business)
    return build_product_form(choices, max_items, values)


@router.post("/{business_slug}/products/form/category-options", response_model=CategoryOptionsResponse)
async def get_category_options(
    request: CategoryOptionsRequest,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Пересчитать поле категорий при изменении выбора в форме.

    Если передан add, категория добавляется только пока лимит не достигнут;
    иначе выбор не меняется и возвращается accepted=false. Категории
    других бизнесов и несуществующие ID не учитываются и не добавляются.
    """
    max_items = await SettingService(db).get_max_product_categories(business.id)
    choices = await get_category_choices(db, business)
    known_ids = {value for value, _ in choices}

    selected = request.category_ids
    accepted = True
    if request.add is not None:
        selected, accepted = add_to_selection(selected, request.add, max_items, allowed=known_ids)

    return CategoryOptionsResponse(
        **build_select_options(choices, selected, max_items),
        accepted=accepted,
    )


@router.post(
    "/{business_slug}/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    request: CreateProductRequest,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """Создать новый продукт для бизнеса."""
    try:
        product = await ProductService(db).create(
            business_id=business.id,
            title=request.title,
            description=request.description,
            price=request.price,
            currency=request.currency,
            sku=request.sku,
            is_active=request.is_active,
            category_ids=request.category_ids,
        )
    except SelectionLimitExceededError as e:
        raise selection_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    await invalidate_catalog_cache(business.slug)
    logger.info(f"Product {product.id} created in business '{business.slug}'")
    return product_to_response(product)


@router.put("/{business_slug}/products/{product_id}", response_model=ProductResponse)
@router.patch("/{business_slug}/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    request: UpdateProductRequest,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """
    Обновить продукт.

    category_ids заменяет набор категорий целиком. При ошибке валидации
    продукт не изменяется.
    """
    service = ProductService(db)
    await get_business_product(product_id, business, service)

    try:
        product = await service.update(
            product_id=product_id,
            title=request.title,
            description=request.description,
            price=request.price,
            currency=request.currency,
            sku=request.sku,
            is_active=request.is_active,
            category_ids=request.category_ids,
        )
    except SelectionLimitExceededError as e:
        raise selection_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    await invalidate_catalog_cache(business.slug)
    return product_to_response(product)


@router.delete("/{business_slug}/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    business: Business = Depends(get_admin_business),
    db: AsyncSession = Depends(get_db),
):
    """Удалить продукт вместе со связями с категориями."""
    service = ProductService(db)
    await get_business_product(product_id, business, service)
    await service.delete(product_id)
    await invalidate_catalog_cache(business.slug)
