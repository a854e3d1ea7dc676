"""Сервис для работы с пользователями."""
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.security import verify_password, get_password_hash
from app.models.user import User
from app.models.business import Business


class UserService:
    """Сервис для работы с пользователями."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> User | None:
        """Получить пользователя по username."""
        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def verify_user_password(self, username_or_email: str, password: str) -> User | None:
        """
        Проверить пароль пользователя.

        Возвращает User если пароль верный, иначе None.
        """
        stmt = select(User).where(
            or_(User.username == username_or_email, User.email == username_or_email)
        )
        result = await self.db.execute(stmt)
        user = result.scalars().first()

        if user and verify_password(password, user.password_hash):
            return user
        return None

    async def get_user_business(self, user_id: uuid.UUID) -> Business | None:
        """Получить бизнес пользователя (где он owner)."""
        stmt = select(Business).where(Business.owner_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_user(
        self,
        username: str,
        password: str,
        email: str | None = None,
        role: str = "owner",
    ) -> User:
        """Создать нового пользователя."""
        user = User(
            username=username,
            password_hash=get_password_hash(password),
            email=email,
            role=role,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user
