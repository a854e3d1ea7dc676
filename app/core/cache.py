"""Кэширование через Redis."""
import json
import logging
from typing import Any, Optional

import redis.asyncio as redis

from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Сервис для работы с кэшем Redis. Без Redis работает как no-op."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._redis: Optional[redis.Redis] = None

    async def connect(self):
        """Подключение к Redis."""
        if not self.enabled or self._redis:
            return
        client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        try:
            # Проверяем подключение
            await client.ping()
        except redis.RedisError as e:
            # Если Redis недоступен, продолжаем без кэша
            logger.warning(f"Redis недоступен, кэш отключен: {e}")
            await client.aclose()
            return
        self._redis = client

    async def disconnect(self):
        """Отключение от Redis."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def _client(self) -> Optional[redis.Redis]:
        if not self._redis:
            await self.connect()
        return self._redis

    async def get(self, key: str) -> Any | None:
        """Получить значение из кэша."""
        client = await self._client()
        if not client:
            return None

        try:
            value = await client.get(key)
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, json.JSONDecodeError) as e:
            logger.warning(f"Ошибка чтения кэша '{key}': {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Установить значение в кэш."""
        client = await self._client()
        if not client:
            return False

        try:
            await client.setex(key, ttl, json.dumps(value, default=str))
            return True
        except redis.RedisError as e:
            logger.warning(f"Ошибка записи кэша '{key}': {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Удалить значение из кэша."""
        client = await self._client()
        if not client:
            return False

        try:
            await client.delete(key)
            return True
        except redis.RedisError as e:
            logger.warning(f"Ошибка удаления кэша '{key}': {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Удалить все ключи по паттерну."""
        client = await self._client()
        if not client:
            return 0

        try:
            keys = [key async for key in client.scan_iter(match=pattern)]
            if keys:
                return await client.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.warning(f"Ошибка очистки кэша '{pattern}': {e}")
            return 0


# Глобальный экземпляр
cache_service = CacheService(enabled=settings.cache_enabled)


def get_cache_key_products(business_slug: str, category_id: str | None = None, page: int = 1, limit: int = 20) -> str:
    """Генерация ключа кэша для списка продуктов."""
    parts = [f"products:{business_slug}"]
    if category_id:
        parts.append(f"cat:{category_id}")
    parts.append(f"page:{page}")
    parts.append(f"limit:{limit}")
    return ":".join(parts)


def get_cache_pattern_products(business_slug: str) -> str:
    """Паттерн для очистки всех списков продуктов бизнеса."""
    return f"products:{business_slug}:*"


def get_cache_key_categories(business_slug: str) -> str:
    """Генерация ключа кэша для категорий."""
    return f"categories:{business_slug}"
