"""
Модуль: `utils/contact_normalizer.py`.
Назначение: Нормализация email-адресов пользователей.
"""

import re


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str | None) -> str:
    """Приводит email к нижнему регистру; для некорректного адреса возвращает пустую строку."""
    if not value:
        return ""
    email = value.strip().lower()
    if not EMAIL_RE.match(email):
        return ""
    return email
