"""
Модуль: `utils/validators.py`.
Назначение: Явная проверка входных данных пользователей и задач перед записью в БД.

Каждая функция возвращает `ValidationResult`: нормализованное значение
и список ошибок по полям. Запись в хранилище выполняется только при
пустом списке ошибок.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from utils.contact_normalizer import normalize_email

USER_FIELDS = ("name", "email", "password", "age")
USER_UPDATABLE_FIELDS = frozenset(USER_FIELDS)
TASK_FIELDS = ("description", "completed")
TASK_UPDATABLE_FIELDS = frozenset(TASK_FIELDS)


@dataclass
class ValidationResult:
    value: Any = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_name(raw) -> ValidationResult:
    """Имя: обязательная непустая строка, пробелы по краям обрезаются."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult(errors=["name: обязательное поле"])
    return ValidationResult(raw.strip())


def validate_email(raw) -> ValidationResult:
    """Email: обязательный, приводится к нижнему регистру и проверяется по формату."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult(errors=["email: обязательное поле"])
    email = normalize_email(raw)
    if not email:
        return ValidationResult(errors=["email: некорректный адрес"])
    return ValidationResult(email)


def validate_password(raw, min_length: int = 7) -> ValidationResult:
    """Пароль: не короче `min_length` и без слова "password"."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult(errors=["password: обязательное поле"])
    password = raw.strip()
    errors = []
    if len(password) < min_length:
        errors.append(f"password: минимальная длина {min_length} символов")
    if "password" in password.lower():
        errors.append('password: не должен содержать слово "password"')
    return ValidationResult(password, errors)


def validate_age(raw) -> ValidationResult:
    """Возраст: неотрицательное целое число."""
    # bool является подклассом int, поэтому отсекаем его явно
    if isinstance(raw, bool) or not isinstance(raw, int):
        return ValidationResult(errors=["age: должно быть целым числом"])
    if raw < 0:
        return ValidationResult(errors=["age: не может быть отрицательным"])
    return ValidationResult(raw)


def validate_description(raw) -> ValidationResult:
    """Описание задачи: обязательная непустая строка."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult(errors=["description: обязательное поле"])
    return ValidationResult(raw.strip())


def validate_completed(raw) -> ValidationResult:
    """Признак выполнения: только true или false."""
    if not isinstance(raw, bool):
        return ValidationResult(errors=["completed: должно быть true или false"])
    return ValidationResult(raw)


def _collect(data: dict, validators: dict) -> ValidationResult:
    """Применяет валидаторы к присутствующим в данных полям и собирает ошибки."""
    values: dict[str, Any] = {}
    errors: list[str] = []
    for name, validator in validators.items():
        if name not in data:
            continue
        result = validator(data[name])
        if result.ok:
            values[name] = result.value
        else:
            errors.extend(result.errors)
    return ValidationResult(values, errors)


def _user_validators(password_min_length: int) -> dict:
    return {
        "name": validate_name,
        "email": validate_email,
        "password": lambda raw: validate_password(raw, password_min_length),
        "age": validate_age,
    }


def validate_signup(data, password_min_length: int = 7) -> ValidationResult:
    """Проверяет данные регистрации; лишние ключи игнорируются."""
    if not isinstance(data, dict):
        return ValidationResult(errors=["Ожидается JSON-объект"])
    result = _collect(data, _user_validators(password_min_length))
    for required in ("name", "email", "password"):
        if required not in data:
            result.errors.append(f"{required}: обязательное поле")
    result.value.setdefault("age", 0)
    return result


def validate_user_update(data, password_min_length: int = 7) -> ValidationResult:
    """Проверяет частичное обновление профиля по белому списку полей."""
    if not isinstance(data, dict):
        return ValidationResult(errors=["Ожидается JSON-объект"])
    unknown = sorted(set(data) - USER_UPDATABLE_FIELDS)
    if unknown:
        return ValidationResult(errors=[f"{name}: поле нельзя изменять" for name in unknown])
    return _collect(data, _user_validators(password_min_length))


def validate_task_create(data) -> ValidationResult:
    """Проверяет данные новой задачи; лишние ключи игнорируются."""
    if not isinstance(data, dict):
        return ValidationResult(errors=["Ожидается JSON-объект"])
    result = _collect(data, {"description": validate_description, "completed": validate_completed})
    if "description" not in data:
        result.errors.append("description: обязательное поле")
    result.value.setdefault("completed", False)
    return result


def validate_task_update(data) -> ValidationResult:
    """Проверяет частичное обновление задачи по белому списку полей."""
    if not isinstance(data, dict):
        return ValidationResult(errors=["Ожидается JSON-объект"])
    unknown = sorted(set(data) - TASK_UPDATABLE_FIELDS)
    if unknown:
        return ValidationResult(errors=[f"{name}: поле нельзя изменять" for name in unknown])
    return _collect(data, {"description": validate_description, "completed": validate_completed})


def has_unknown_fields(data, allowed: frozenset) -> bool:
    """Есть ли в данных ключи вне разрешённого набора."""
    return isinstance(data, dict) and bool(set(data) - allowed)
