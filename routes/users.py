"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: routes/users.py – маршруты учётных записей.

Назначение модуля:
- Регистрация, вход и выход (из текущей сессии или из всех сразу).
- Чтение, обновление и удаление собственного профиля.
- Загрузка, удаление и выдача аватара пользователя.
"""

from flask import Response, current_app, g, jsonify, request
from flask_login import current_user, login_required

from config import Config
from stores import credential_store
from utils.errors import InvalidCredentialsError, NotFoundError, ValidationError
from utils.image_processor import make_avatar, validate_image_bytes
from utils.notifications import ACCOUNT_DELETED, SIGNUP


def _issue_token(user) -> str:
    """Выпускает токен и добавляет его в список сессий пользователя."""
    token = current_app.extensions["token_authority"].issue(user.id)
    credential_store.add_token(user, token)
    return token


def _json_body():
    """Тело запроса как JSON или None, если разобрать не удалось."""
    return request.get_json(force=True, silent=True)


def register_routes(app):
    """Регистрирует маршруты `/users`."""

    @app.post("/users")
    def signup():
        """Регистрация нового пользователя с выдачей первого токена."""
        user = credential_store.create_user(_json_body())
        token = _issue_token(user)
        current_app.logger.info("Зарегистрирован пользователь %s", user.id)
        current_app.extensions["notifier"].dispatch(SIGNUP, user.email, user.name)
        return jsonify({"user": user.to_dict(), "token": token}), 201

    @app.post("/users/login")
    def login():
        """Вход по email и паролю с выдачей нового токена."""
        data = _json_body()
        if not isinstance(data, dict):
            data = {}
        try:
            user = credential_store.find_by_credentials(data.get("email"), data.get("password"))
        except InvalidCredentialsError:
            current_app.logger.warning("Неудачная попытка входа для %r", data.get("email"))
            raise
        token = _issue_token(user)
        return jsonify({"user": user.to_dict(), "token": token})

    @app.post("/users/logout")
    @login_required
    def logout():
        """Завершение текущей сессии: удаляется только предъявленный токен."""
        credential_store.remove_token(current_user, g.auth_token)
        current_app.logger.info("Пользователь %s вышел из сессии", current_user.id)
        return jsonify({"success": True})

    @app.post("/users/logoutAll")
    @login_required
    def logout_all():
        """Завершение всех сессий пользователя."""
        credential_store.clear_tokens(current_user)
        current_app.logger.info("Пользователь %s вышел из всех сессий", current_user.id)
        return jsonify({"success": True})

    @app.get("/users/me")
    @login_required
    def read_profile():
        """Профиль текущего пользователя."""
        return jsonify(current_user.to_dict())

    @app.patch("/users/me")
    @login_required
    def update_profile():
        """Частичное обновление профиля: name, email, password, age."""
        user = credential_store.update_user(current_user, _json_body())
        return jsonify(user.to_dict())

    @app.delete("/users/me")
    @login_required
    def delete_profile():
        """Удаление аккаунта с каскадным удалением задач и письмом об отмене."""
        user = current_user._get_current_object()
        payload = user.to_dict()
        email, name = user.email, user.name
        credential_store.delete_user(user)
        current_app.logger.info("Удалён аккаунт %s", payload["id"])
        current_app.extensions["notifier"].dispatch(ACCOUNT_DELETED, email, name)
        return jsonify(payload)

    @app.post("/users/me/avatar")
    @login_required
    def upload_avatar():
        """Загрузка аватара (jpg, jpeg, png) с приведением к PNG 250x250."""
        if "avatar" not in request.files:
            raise ValidationError("Файл не был загружен")

        file = request.files["avatar"]
        if not file.filename or not Config.allowed_avatar(file.filename):
            raise ValidationError("Please upload an image")

        max_bytes = current_app.config["MAX_AVATAR_BYTES"]
        data = file.stream.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise ValidationError("File too large")

        validate_image_bytes(data, current_app.config["ALLOWED_AVATAR_FORMATS"])
        credential_store.set_avatar(
            current_user,
            make_avatar(data, tuple(current_app.config["AVATAR_SIZE"])),
        )
        return jsonify({"success": True})

    @app.delete("/users/me/avatar")
    @login_required
    def delete_avatar():
        """Удаление аватара текущего пользователя."""
        credential_store.set_avatar(current_user, None)
        return jsonify({"success": True})

    @app.get("/users/<user_id>/avatar")
    def read_avatar(user_id):
        """Выдача аватара пользователя в формате PNG."""
        user = credential_store.find_by_id(user_id)
        if user is None or not user.avatar:
            raise NotFoundError("Аватар не найден")
        return Response(user.avatar, mimetype="image/png")
