"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: stores/credential_store.py – хранилище учётных записей.

Назначение модуля:
- Создание пользователя с проверкой уникальности email и хешированием пароля.
- Поиск по идентификатору и по паре email/пароль.
- Обновление профиля по белому списку полей, удаление с каскадом на задачи.
- Управление списком выданных токенов и аватаром.
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from models.user import User
from models.user_token import UserToken
from utils.contact_normalizer import normalize_email
from utils.errors import InvalidCredentialsError, ValidationError
from utils.validators import (
    USER_UPDATABLE_FIELDS,
    has_unknown_fields,
    validate_signup,
    validate_user_update,
)


def _password_min_length() -> int:
    """Минимальная длина пароля из конфигурации приложения."""
    return int(current_app.config.get("PASSWORD_MIN_LENGTH", 7))


def _email_taken(email: str, exclude_user_id: str | None = None) -> bool:
    """Проверяет, занят ли email другим пользователем."""
    query = User.query.filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return db.session.query(query.exists()).scalar()


def _commit_or_duplicate():
    """Фиксирует транзакцию; нарушение уникальности email превращает в ValidationError."""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("Пользователь с таким email уже существует") from None


def create_user(data) -> User:
    """Создаёт пользователя после проверки данных и уникальности email."""
    result = validate_signup(data, _password_min_length())
    if not result.ok:
        raise ValidationError("Некорректные данные пользователя", result.errors)

    values = result.value
    if _email_taken(values["email"]):
        raise ValidationError("Пользователь с таким email уже существует")

    user = User(name=values["name"], email=values["email"], age=values["age"])
    user.password = values["password"]
    db.session.add(user)
    _commit_or_duplicate()
    return user


def find_by_id(user_id) -> User | None:
    """Возвращает пользователя по идентификатору или None."""
    if not isinstance(user_id, str) or not user_id:
        return None
    return db.session.get(User, user_id)


def find_by_credentials(email, password) -> User:
    """Ищет пользователя по email и паролю; при несовпадении выбрасывает InvalidCredentialsError."""
    normalized = normalize_email(email if isinstance(email, str) else None)
    user = User.query.filter_by(email=normalized).first() if normalized else None
    if user is None or not isinstance(password, str) or not user.check_password(password):
        raise InvalidCredentialsError("Unable to login")
    return user


def update_user(user: User, data) -> User:
    """Обновляет профиль по белому списку полей name, email, password, age."""
    if not isinstance(data, dict):
        raise ValidationError("Ожидается JSON-объект")
    if has_unknown_fields(data, USER_UPDATABLE_FIELDS):
        raise ValidationError("Invalid updates!")

    result = validate_user_update(data, _password_min_length())
    if not result.ok:
        raise ValidationError("Некорректные данные пользователя", result.errors)

    values = result.value
    if "email" in values and _email_taken(values["email"], exclude_user_id=user.id):
        raise ValidationError("Пользователь с таким email уже существует")

    for name, value in values.items():
        setattr(user, name, value)
    _commit_or_duplicate()
    return user


def delete_user(user: User):
    """Удаляет пользователя вместе с его задачами и токенами."""
    # Задачи и токены удаляются каскадом через relationship
    db.session.delete(user)
    db.session.commit()


def add_token(user: User, token: str):
    """Добавляет выданный токен в список активных сессий пользователя."""
    user.tokens.append(UserToken(token=token))
    db.session.commit()


def remove_token(user: User, token: str) -> bool:
    """Удаляет одну запись с указанным токеном; остальные сессии не затрагиваются."""
    for entry in user.tokens:
        if entry.token == token:
            user.tokens.remove(entry)
            db.session.commit()
            return True
    return False


def clear_tokens(user: User):
    """Завершает все сессии пользователя."""
    user.tokens.clear()
    db.session.commit()


def set_avatar(user: User, data: bytes | None):
    """Сохраняет или удаляет (при None) аватар пользователя."""
    user.avatar = data
    db.session.commit()
