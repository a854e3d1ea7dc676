"""Админ-авторизация."""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from app.core.auth import ADMIN_ROLES
from app.core.security import create_access_token
from app.database import get_db
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    """Запрос на авторизацию."""

    username: str  # Может быть username или email
    password: str


class LoginResponse(BaseModel):
    """Ответ на авторизацию."""

    ok: bool
    access_token: str
    business_slug: str | None = None
    business_name: str | None = None
    message: str | None = None


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Авторизация владельца бизнеса по username/email и паролю.

    После успешной авторизации возвращает токен и информацию о бизнесе пользователя.
    """
    user_service = UserService(db)
    user = await user_service.verify_user_password(request.username, request.password)

    if not user:
        logger.warning(f"Failed admin login for '{request.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверный логин или пароль",
        )

    if user.role not in ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Недостаточно прав доступа",
        )

    # У superadmin бизнеса может не быть
    business = await user_service.get_user_business(user.id)
    if not business and user.role != "superadmin":
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Бизнес не найден для данного пользователя",
        )

    user.last_login = datetime.utcnow()
    await db.commit()

    access_token = create_access_token(data={
        "user_id": str(user.id),
        "username": user.username,
        "role": user.role,
        "business_id": str(business.id) if business else None,
        "business_slug": business.slug if business else None,
    })

    return LoginResponse(
        ok=True,
        access_token=access_token,
        business_slug=business.slug if business else None,
        business_name=business.name if business else None,
        message="Авторизация успешна",
    )
