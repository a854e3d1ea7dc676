"""Общие фикстуры тестов: SQLite в памяти, тестовый бизнес и каталог."""
import os

# Настройки читаются при импорте app.config, поэтому задаем окружение до импорта приложения
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["CACHE_ENABLED"] = "false"
os.environ["MAX_PRODUCT_CATEGORIES"] = "2"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.security import create_access_token
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models.business import Business
from app.models.category import Category
from app.models.user import User


@pytest.fixture(name="engine")
async def engine_fixture():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(name="session_factory")
def session_factory_fixture(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture(name="db")
async def db_fixture(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(name="owner")
async def owner_fixture(db: AsyncSession) -> User:
    # Хеш не проверяется в этих тестах, логин проверяется отдельно
    user = User(username="shop_owner", password_hash="not-a-bcrypt-hash", role="owner")
    db.add(user)
    await db.commit()
    return user


@pytest.fixture(name="business")
async def business_fixture(db: AsyncSession, owner: User) -> Business:
    business = Business(owner_id=owner.id, name="Demo shop", slug="demo-shop")
    db.add(business)
    await db.commit()
    return business


@pytest.fixture(name="categories")
async def categories_fixture(db: AsyncSession, business: Business) -> dict[str, Category]:
    categories = {}
    for position, name in enumerate(["Electronics", "Books", "Toys"]):
        category = Category(business_id=business.id, name=name, position=position)
        db.add(category)
        categories[name] = category
    await db.commit()
    return categories


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(owner: User, business: Business) -> dict[str, str]:
    token = create_access_token(data={
        "user_id": str(owner.id),
        "username": owner.username,
        "role": "owner",
        "business_id": str(business.id),
        "business_slug": business.slug,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="client")
async def client_fixture(session_factory):
    async def get_db_override():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = get_db_override
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    fastapi_app.dependency_overrides.clear()
