"""
Модуль: `stores/__init__.py`.
Назначение: Операции чтения и записи пользователей и задач поверх SQLAlchemy-моделей.
"""
