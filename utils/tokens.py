"""
Модуль: `utils/tokens.py`.
Назначение: Выпуск и проверка подписанных Bearer-токенов.

Токен содержит идентификатор пользователя, время выпуска и случайный
идентификатор сессии, подписанные секретом приложения; срок действия
не задаётся. Наличие токена в списке активных сессий пользователя
проверяет `utils/auth_gate.py`.
"""

import secrets
import time

from itsdangerous import BadData, URLSafeSerializer


class InvalidTokenError(Exception):
    """Подпись токена не сходится или полезная нагрузка повреждена."""


class TokenAuthority:
    """Выпускает и проверяет токены; секрет передаётся явно при создании."""

    def __init__(self, secret: str, salt: str = "taskly-auth-token"):
        if not secret:
            raise ValueError("Секрет подписи токенов не задан")
        self._serializer = URLSafeSerializer(secret, salt=salt)

    def issue(self, user_id: str) -> str:
        """Выпускает новый токен; каждый вызов даёт отдельную сессию."""
        return self._serializer.dumps(
            {"_id": user_id, "iat": int(time.time()), "jti": secrets.token_urlsafe(8)}
        )

    def verify(self, token: str) -> str:
        """Проверяет подпись и возвращает идентификатор пользователя."""
        try:
            payload = self._serializer.loads(token)
        except BadData as exc:
            raise InvalidTokenError("Недействительная подпись токена") from exc

        user_id = payload.get("_id") if isinstance(payload, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Повреждённая полезная нагрузка токена")
        return user_id
