"""
Модуль: `models/__init__.py`.
Назначение: Импорт моделей для корректной регистрации в SQLAlchemy metadata.
"""

from .user import User
from .user_token import UserToken
from .task import Task

__all__ = ["User", "UserToken", "Task"]
