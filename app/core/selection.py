"""Ограничение количества выбранных элементов в multi-select полях.

Считаются только уникальные идентификаторы: дубликаты в одной отправке
формы не увеличивают количество выбранных элементов.
"""
import logging
from typing import Hashable, Iterable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

# Формы существительного после "не более N": (1, 21, 31...) и (остальные)
CATEGORY_NOUN_FORMS = ("категории", "категорий")


def plural_noun(count: int, noun_forms: Sequence[str] = CATEGORY_NOUN_FORMS) -> str:
    """Выбрать форму существительного для числа (родительный падеж)."""
    if count % 10 == 1 and count % 100 != 11:
        return noun_forms[0]
    return noun_forms[1]


def format_limit_message(
    max_items: int,
    selected_count: int,
    noun_forms: Sequence[str] = CATEGORY_NOUN_FORMS,
) -> str:
    """Текст ошибки для пользователя: лимит и сколько элементов выбрано."""
    return (
        f"Можно выбрать не более {max_items} {plural_noun(max_items, noun_forms)} "
        f"(выбрано: {selected_count})"
    )


class SelectionLimitExceededError(ValueError):
    """Выбрано больше элементов, чем разрешено для поля."""

    def __init__(
        self,
        attribute: str,
        max_items: int,
        selected_count: int,
        noun_forms: Sequence[str] = CATEGORY_NOUN_FORMS,
    ):
        self.attribute = attribute
        self.max_items = max_items
        self.selected_count = selected_count
        self.message = format_limit_message(max_items, selected_count, noun_forms)
        super().__init__(self.message)

    def to_detail(self) -> dict:
        """Тело ошибки для ответа API."""
        return {
            "message": self.message,
            "attribute": self.attribute,
            "max_items": self.max_items,
            "selected_count": self.selected_count,
        }


def unique_selection(selected_ids: Iterable[T]) -> list[T]:
    """Убрать дубликаты, сохранив порядок выбора."""
    return list(dict.fromkeys(selected_ids))


def check_max_items(max_items: int) -> int:
    """Проверить, что лимит неотрицательный."""
    if max_items < 0:
        raise ValueError(f"Лимит выбора не может быть отрицательным: {max_items}")
    return max_items


def validate_selection(
    selected_ids: Iterable[T],
    max_items: int,
    attribute: str = "category_ids",
    noun_forms: Sequence[str] = CATEGORY_NOUN_FORMS,
) -> list[T]:
    """
    Проверить выбор пользователя.

    Args:
        selected_ids: Выбранные идентификаторы (могут содержать дубликаты)
        max_items: Максимальное количество уникальных элементов
        attribute: Имя поля формы (для текста ошибки и логов)

    Returns:
        Уникальные идентификаторы в порядке выбора

    Raises:
        SelectionLimitExceededError: Если уникальных элементов больше max_items
    """
    check_max_items(max_items)
    unique_ids = unique_selection(selected_ids)
    if len(unique_ids) > max_items:
        logger.warning(
            f"Selection limit exceeded for '{attribute}': "
            f"{len(unique_ids)} selected, max {max_items}"
        )
        raise SelectionLimitExceededError(attribute, max_items, len(unique_ids), noun_forms)
    return unique_ids


class MaxSelectedItems:
    """
    Правило валидации "не более N выбранных элементов".

    Вызывается со списком идентификаторов и возвращает (ok, message):
    (True, "") если выбор допустим, иначе (False, "описание ошибки").
    """

    def __init__(self, max_items: int, noun_forms: Sequence[str] = CATEGORY_NOUN_FORMS):
        self.max_items = check_max_items(max_items)
        self.noun_forms = noun_forms

    def __call__(self, selected_ids: Iterable[Hashable]) -> tuple[bool, str]:
        selected_count = len(unique_selection(selected_ids))
        if selected_count > self.max_items:
            return False, format_limit_message(self.max_items, selected_count, self.noun_forms)
        return True, ""
