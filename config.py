"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Определение базовых параметров приложения Flask (секретные ключи, строка подключения к БД).
- Настройка ограничений загрузки аватаров (размер, допустимые расширения).
- Параметры SMTP-доставки уведомлений и журналирования.
"""

import os
import warnings


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str] | None = None) -> list[str]:
    """Преобразует переменную окружения вида 'a,b,c' в список."""
    value = os.environ.get(name)
    if value is None:
        return list(default or [])
    return [item.strip() for item in value.split(",") if item.strip()]


def _is_production() -> bool:
    """Определяет production-режим по FLASK_ENV."""
    return os.environ.get("FLASK_ENV", "").strip().lower() == "production"


class Config:
    """Базовая конфигурация приложения."""

    _PRODUCTION = _is_production()

    SECRET_KEY = os.environ.get("SECRET_KEY")
    if not SECRET_KEY:
        if _PRODUCTION:
            raise RuntimeError(
                "SECRET_KEY environment variable is required in production. "
                "Set a strong random value before starting the app."
            )
        SECRET_KEY = "dev-insecure-secret-key"
        warnings.warn(
            "SECRET_KEY is not set. Using insecure development fallback key.",
            RuntimeWarning,
            stacklevel=1,
        )

    # Секрет подписи токенов доступа; по умолчанию совпадает с SECRET_KEY
    TOKEN_SECRET = os.environ.get("JWT_SECRET") or SECRET_KEY
    TOKEN_SALT = "taskly-auth-token"

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///taskly.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # API работает только по Bearer-токенам, cookie-сессии не используются
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True

    CORS_ENABLED = _get_env_bool("CORS_ENABLED", default=False)
    CORS_ORIGINS = _get_env_list(
        "CORS_ORIGINS",
        default=[
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ],
    )

    MAX_AVATAR_BYTES = _get_env_int("MAX_AVATAR_BYTES", 1_000_000)
    ALLOWED_AVATAR_EXTENSIONS = {"jpg", "jpeg", "png"}
    ALLOWED_AVATAR_FORMATS = {"jpeg", "png"}
    AVATAR_SIZE = (250, 250)

    PASSWORD_MIN_LENGTH = _get_env_int("PASSWORD_MIN_LENGTH", 7)

    SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.sendgrid.net").strip()
    SMTP_PORT = _get_env_int("SMTP_PORT", 587)
    SMTP_USER = os.environ.get("SMTP_USER", "apikey").strip()
    # Ключ API провайдера используется как пароль SMTP-релея
    SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD") or os.environ.get("SENDGRID_API_KEY", "")
    SMTP_FROM = os.environ.get("MAIL_FROM", "").strip()
    SMTP_USE_TLS = _get_env_bool("SMTP_USE_TLS", default=True)
    SMTP_USE_SSL = _get_env_bool("SMTP_USE_SSL", default=False)

    NOTIFICATIONS_ENABLED = _get_env_bool("NOTIFICATIONS_ENABLED", default=True)
    NOTIFICATIONS_ASYNC = _get_env_bool("NOTIFICATIONS_ASYNC", default=True)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    @staticmethod
    def allowed_avatar(filename: str) -> bool:
        """Проверяет расширение файла аватара."""
        return (
            "." in filename
            and filename.rsplit(".", 1)[1].lower() in Config.ALLOWED_AVATAR_EXTENSIONS
        )
