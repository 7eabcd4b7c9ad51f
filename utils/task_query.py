"""
Модуль: `utils/task_query.py`.
Назначение: Преобразование параметров запроса `GET /tasks` в фильтр, сортировку и пагинацию.

Поддерживаемые параметры:
- `completed=true|false` – фильтр по признаку выполнения;
- `sortBy=<поле>_<asc|desc>` – сортировка по description, completed, createdAt, updatedAt;
- `skip`, `limit` – смещение и размер страницы.

Неизвестное поле сортировки молча игнорируется, выборка остаётся в порядке по умолчанию.
"""

from __future__ import annotations

from dataclasses import dataclass

from models.task import Task
from utils.errors import ValidationError

SORTABLE_FIELDS = {
    "description": Task.description,
    "completed": Task.completed,
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
}


@dataclass(frozen=True)
class TaskQuery:
    completed: bool | None = None
    sort_field: str | None = None
    descending: bool = False
    skip: int | None = None
    limit: int | None = None


def _parse_int(name: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Параметр {name} должен быть целым числом") from None
    if value < minimum:
        raise ValidationError(f"Параметр {name} должен быть не меньше {minimum}")
    return value


def parse_task_query(args) -> TaskQuery:
    """Разбирает словарь параметров запроса (например, `request.args`)."""
    completed = None
    raw_completed = args.get("completed")
    if raw_completed is not None:
        completed = raw_completed == "true"

    sort_field = None
    descending = False
    raw_sort = args.get("sortBy")
    if raw_sort:
        field_name, _, direction = raw_sort.rpartition("_")
        if field_name in SORTABLE_FIELDS:
            sort_field = field_name
            descending = direction == "desc"

    skip = None
    raw_skip = args.get("skip")
    if raw_skip is not None and raw_skip != "":
        skip = _parse_int("skip", raw_skip, 0)

    limit = None
    raw_limit = args.get("limit")
    if raw_limit is not None and raw_limit != "":
        limit = _parse_int("limit", raw_limit, 1)

    return TaskQuery(completed, sort_field, descending, skip, limit)


def apply_task_query(query, owner_id: str, task_query: TaskQuery):
    """Накладывает фильтр владельца и параметры выборки на SQLAlchemy-запрос задач."""
    query = query.filter(Task.owner_id == owner_id)

    if task_query.completed is not None:
        query = query.filter(Task.completed == task_query.completed)

    ordering = []
    if task_query.sort_field:
        column = SORTABLE_FIELDS[task_query.sort_field]
        ordering.append(column.desc() if task_query.descending else column.asc())
    ordering.extend([Task.created_at.asc(), Task.id.asc()])
    query = query.order_by(*ordering)

    if task_query.skip:
        query = query.offset(task_query.skip)
    if task_query.limit is not None:
        query = query.limit(task_query.limit)
    return query
