"""Dependencies для аутентификации."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_access_token
from app.database import get_db
from app.models.business import Business
from app.services.business_service import BusinessService

security = HTTPBearer()

ADMIN_ROLES = ("owner", "superadmin")


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Проверка токена администратора/владельца бизнеса.

    Используется как dependency для защищенных эндпоинтов.
    Возвращает payload с информацией о пользователе и бизнесе.
    """
    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверный или истекший токен",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("role") not in ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Недостаточно прав доступа",
        )

    return payload


async def get_admin_business(
    business_slug: str,
    admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> Business:
    """
    Бизнес из URL, к которому у администратора есть доступ.

    Владелец работает только со своим бизнесом, superadmin - с любым.
    """
    business = await BusinessService(db).get_by_slug(business_slug)
    if not business:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Бизнес с slug '{business_slug}' не найден",
        )

    if admin.get("role") != "superadmin" and admin.get("business_slug") != business.slug:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Нет доступа к этому бизнесу",
        )

    return business
