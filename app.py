"""
Название: «Taskly»
Язык: Python (Flask)
Краткое описание: REST-сервис для регистрации пользователей и управления их личными задачами
"""

import os

from flask import Flask

from config import Config
from extensions import db, login_manager, cors
import models  # noqa: F401 - регистрирует модели для db.create_all()
from routes.users import register_routes as register_user_routes
from routes.tasks import register_routes as register_task_routes
from utils.auth_gate import init_auth_gate
from utils.errors import register_error_handlers
from utils.notifications import init_notifier
from utils.tokens import TokenAuthority


def create_app(config_object=None) -> Flask:
    """Фабрика приложения, собирающая все модули воедино."""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Инициализация расширений
    db.init_app(app)
    login_manager.init_app(app)
    # Сессии не используются: пользователь определяется по Bearer-токену в каждом запросе
    login_manager.session_protection = None
    init_auth_gate(app, login_manager)

    if app.config["CORS_ENABLED"]:
        cors.init_app(
            app,
            resources={
                r"/users*": {"origins": app.config["CORS_ORIGINS"]},
                r"/tasks*": {"origins": app.config["CORS_ORIGINS"]},
            },
        )

    # Секрет подписи передаётся явно, а не читается из глобального состояния
    app.extensions["token_authority"] = TokenAuthority(
        app.config["TOKEN_SECRET"],
        salt=app.config.get("TOKEN_SALT", "taskly-auth-token"),
    )
    init_notifier(app)

    register_error_handlers(app)
    register_user_routes(app)
    register_task_routes(app)

    with app.app_context():
        # Создаем отсутствующие таблицы (без изменения существующих колонок)
        db.create_all()

    @app.after_request
    def apply_security_headers(response):
        """Добавляет базовые заголовки безопасности к каждому ответу."""
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    return app


if __name__ == "__main__":
    app = create_app()
    is_production = os.environ.get("FLASK_ENV", "").lower() == "production"
    app.run(debug=not is_production)
