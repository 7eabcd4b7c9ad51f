"""
Модуль: `utils/auth_gate.py`.
Назначение: Аутентификация запросов по заголовку `Authorization: Bearer <token>`.

Пользователь определяется в `before_request` только по заголовку и
передаётся в контекст Flask-Login, поэтому защищённые маршруты используют
стандартные `login_required` и `current_user`, а cookie Flask-Login
(сессия, remember_token) на результат не влияют. Токен, по которому прошёл
запрос, сохраняется в `g.auth_token` для выхода из сессии.
"""

from flask import current_app, g, request

from stores import credential_store
from utils.errors import UnauthenticatedError
from utils.tokens import InvalidTokenError, TokenAuthority

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: str | None) -> str:
    """Извлекает токен из значения заголовка Authorization."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise UnauthenticatedError("Please authenticate.")
    token = header_value[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthenticatedError("Please authenticate.")
    return token


def authenticate(header_value: str | None, authority: TokenAuthority):
    """Возвращает пару (пользователь, токен) или выбрасывает UnauthenticatedError."""
    token = extract_bearer_token(header_value)
    try:
        user_id = authority.verify(token)
    except InvalidTokenError as exc:
        raise UnauthenticatedError("Please authenticate.") from exc

    user = credential_store.find_by_id(user_id)
    # Отозванный при выходе токен остаётся валидным по подписи, но отсутствует в списке
    if user is None or not user.has_token(token):
        raise UnauthenticatedError("Please authenticate.")
    return user, token


def init_auth_gate(app, login_manager):
    """Подключает проверку Bearer-токена к приложению и Flask-Login."""

    @app.before_request
    def resolve_bearer_user():
        g.auth_token = None
        user = None
        header_value = request.headers.get("Authorization")
        if header_value is not None:
            authority = current_app.extensions["token_authority"]
            try:
                user, g.auth_token = authenticate(header_value, authority)
            except UnauthenticatedError as exc:
                current_app.logger.debug(
                    "Запрос отклонён: %s %s (%s)", request.method, request.path, exc.__cause__ or exc
                )
        # Заполненный контекст не даёт Flask-Login читать сессию и remember-cookie
        login_manager._update_request_context_with_user(user)

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        raise UnauthenticatedError("Please authenticate.")
