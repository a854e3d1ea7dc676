"""Декларативные формы админки."""
from typing import Any, Collection, Hashable, Iterable

from app.core.selection import check_max_items, unique_selection


def add_to_selection(
    selected_ids: Iterable[Hashable],
    value: Hashable,
    max_items: int,
    allowed: Collection[Hashable] | None = None,
) -> tuple[list, bool]:
    """
    Добавить элемент в выбор, если лимит это позволяет.

    Если передан allowed, элементы вне него выбрасываются из выбора
    и не добавляются.

    Returns:
        Tuple (новый выбор, принят ли элемент). Уже выбранный элемент
        считается принятым, выбор при этом не меняется.
    """
    check_max_items(max_items)
    selection = unique_selection(selected_ids)
    if allowed is not None:
        selection = [item for item in selection if item in allowed]
        if value not in allowed:
            return selection, False
    if value in selection:
        return selection, True
    if len(selection) >= max_items:
        return selection, False
    return selection + [value], True


def build_select_options(
    choices: Iterable[tuple[Hashable, str]],
    selected_ids: Iterable[Hashable],
    max_items: int,
) -> dict[str, Any]:
    """
    Собрать состояние multi-select поля с учетом лимита.

    Когда выбрано max_items элементов, все невыбранные опции отключаются.
    Выбранные опции не отключаются никогда, чтобы их можно было снять.
    Значения, которых нет среди choices, в выбор не попадают.
    """
    check_max_items(max_items)
    choices = list(choices)
    known = {value for value, _ in choices}
    selection = [item for item in unique_selection(selected_ids) if item in known]
    selected_set = set(selection)
    limit_reached = len(selection) >= max_items

    options = []
    for value, label in choices:
        is_selected = value in selected_set
        options.append({
            "value": value,
            "label": label,
            "selected": is_selected,
            "disabled": limit_reached and not is_selected,
        })

    return {
        "options": options,
        "selected": selection,
        "max_items": max_items,
        "selected_count": len(selection),
        "remaining": max(max_items - len(selection), 0),
        "can_add_more": not limit_reached,
    }


def build_product_form(
    category_choices: Iterable[tuple[Hashable, str]],
    max_categories: int,
    values: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Схема формы товара для админки (создание и редактирование)."""
    values = values or {}
    category_state = build_select_options(
        category_choices,
        values.get("category_ids") or [],
        max_categories,
    )

    return {
        "fields": [
            {
                "name": "title",
                "type": "text",
                "label": "Название",
                "required": True,
                "value": values.get("title"),
            },
            {
                "name": "description",
                "type": "textarea",
                "label": "Описание",
                "required": False,
                "value": values.get("description"),
            },
            {
                "name": "price",
                "type": "number",
                "label": "Цена",
                "required": True,
                "value": values.get("price"),
            },
            {
                "name": "is_active",
                "type": "checkbox",
                "label": "Активен",
                "required": False,
                "value": values.get("is_active", True),
            },
            {
                "name": "category_ids",
                "type": "select",
                "label": "Категории",
                "required": False,
                "multiple": True,
                "max_items": category_state["max_items"],
                "options": category_state["options"],
                "value": category_state["selected"],
                "help_text": f"Не более {max_categories} шт.",
            },
        ],
    }
