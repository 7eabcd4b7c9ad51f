"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: routes/tasks.py – маршруты задач текущего пользователя.

Все операции выполняются только над задачами аутентифицированного владельца.
"""

from flask import jsonify, request
from flask_login import current_user, login_required

from stores import task_store
from utils.task_query import parse_task_query


def register_routes(app):
    """Регистрирует маршруты `/tasks`."""

    @app.post("/tasks")
    @login_required
    def create_task():
        """Создание задачи текущего пользователя."""
        task = task_store.create_task(current_user.id, request.get_json(force=True, silent=True))
        return jsonify(task.to_dict()), 201

    @app.get("/tasks")
    @login_required
    def list_tasks():
        """Список задач с фильтром `completed`, сортировкой `sortBy` и пагинацией `skip`/`limit`."""
        tasks = task_store.list_tasks(current_user.id, parse_task_query(request.args))
        return jsonify([task.to_dict() for task in tasks])

    @app.get("/tasks/<task_id>")
    @login_required
    def read_task(task_id):
        """Чтение одной задачи текущего пользователя."""
        return jsonify(task_store.find_task(current_user.id, task_id).to_dict())

    @app.patch("/tasks/<task_id>")
    @login_required
    def update_task(task_id):
        """Частичное обновление задачи: description, completed."""
        task = task_store.update_task(current_user.id, task_id, request.get_json(force=True, silent=True))
        return jsonify(task.to_dict())

    @app.delete("/tasks/<task_id>")
    @login_required
    def delete_task(task_id):
        """Удаление задачи текущего пользователя."""
        return jsonify(task_store.delete_task(current_user.id, task_id))
