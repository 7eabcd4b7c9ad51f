"""
Модуль: `utils/errors.py`.
Назначение: Иерархия прикладных ошибок и их отображение в HTTP-ответы.
"""

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from extensions import db


class ApiError(Exception):
    """Базовая ошибка, которая преобразуется в JSON-ответ с заданным статусом."""

    status = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ApiError):
    """Некорректные входные данные или нарушение белого списка полей."""

    status = 400

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class InvalidCredentialsError(ApiError):
    status = 400


class UnauthenticatedError(ApiError):
    status = 401


class NotFoundError(ApiError):
    status = 404


class StoreFault(ApiError):
    """Непредвиденный сбой на уровне хранилища (например, некорректный идентификатор)."""

    status = 500


def _api_error(message: str, status: int = 400, errors: list[str] | None = None):
    payload = {"success": False, "error": message}
    if errors:
        payload["errors"] = errors
    return jsonify(payload), status


def register_error_handlers(app):
    """Регистрирует преобразование ошибок в JSON-ответы."""

    @app.errorhandler(StoreFault)
    def handle_store_fault(error):
        current_app.logger.exception("Сбой хранилища: %s", error.message)
        return _api_error("Внутренняя ошибка сервера", 500)

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return _api_error(error.message, error.status, getattr(error, "errors", None))

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Ошибка базы данных")
        return _api_error("Внутренняя ошибка сервера", 500)
