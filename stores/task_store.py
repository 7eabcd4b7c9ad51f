"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: stores/task_store.py – хранилище задач.

Все операции ограничены владельцем: чужая задача для вызывающего
неотличима от несуществующей.
"""

import re

from extensions import db
from models.task import Task
from utils.errors import NotFoundError, StoreFault, ValidationError
from utils.task_query import TaskQuery, apply_task_query
from utils.validators import (
    TASK_UPDATABLE_FIELDS,
    has_unknown_fields,
    validate_task_create,
    validate_task_update,
)

TASK_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def _parse_task_id(raw_id) -> str:
    """Проверяет формат идентификатора задачи; некорректный считается сбоем хранилища."""
    if not isinstance(raw_id, str) or not TASK_ID_RE.match(raw_id):
        raise StoreFault(f"Некорректный идентификатор задачи: {raw_id!r}")
    return raw_id


def create_task(owner_id: str, data) -> Task:
    """Создаёт задачу, привязанную к владельцу."""
    result = validate_task_create(data)
    if not result.ok:
        raise ValidationError("Некорректные данные задачи", result.errors)

    task = Task(owner_id=owner_id, **result.value)
    db.session.add(task)
    db.session.commit()
    return task


def find_task(owner_id: str, task_id) -> Task:
    """Возвращает задачу владельца или выбрасывает NotFoundError."""
    task = Task.query.filter_by(id=_parse_task_id(task_id), owner_id=owner_id).first()
    if task is None:
        raise NotFoundError("Задача не найдена")
    return task


def list_tasks(owner_id: str, task_query: TaskQuery) -> list[Task]:
    """Возвращает задачи владельца с учётом фильтра, сортировки и пагинации."""
    return apply_task_query(Task.query, owner_id, task_query).all()


def update_task(owner_id: str, task_id, data) -> Task:
    """Обновляет задачу владельца по белому списку полей description, completed."""
    if not isinstance(data, dict):
        raise ValidationError("Ожидается JSON-объект")
    if has_unknown_fields(data, TASK_UPDATABLE_FIELDS):
        raise ValidationError("Invalid updates!")

    result = validate_task_update(data)
    if not result.ok:
        raise ValidationError("Некорректные данные задачи", result.errors)

    task = find_task(owner_id, task_id)
    for name, value in result.value.items():
        setattr(task, name, value)
    db.session.commit()
    return task


def delete_task(owner_id: str, task_id) -> dict:
    """Удаляет задачу и возвращает её представление на момент удаления."""
    task = find_task(owner_id, task_id)
    snapshot = task.to_dict()
    db.session.delete(task)
    db.session.commit()
    return snapshot
