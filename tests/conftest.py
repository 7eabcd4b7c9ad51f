# tests/conftest.py

from __future__ import annotations

import os
from datetime import datetime, timedelta
from types import SimpleNamespace

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from app import create_app
from config import Config
from extensions import db
from models.task import Task
from models.user import User
from models.user_token import UserToken


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    TOKEN_SECRET = "test-token-secret"
    NOTIFICATIONS_ASYNC = False
    SMTP_HOST = ""
    LOG_LEVEL = "DEBUG"


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def sent_notifications(app):
    """Записывает события уведомлений вместо реальной отправки писем."""
    sent = []
    notifier = app.extensions["notifier"]
    notifier.register("signup", lambda email, name: sent.append(("signup", email, name)))
    notifier.register("account_deleted", lambda email, name: sent.append(("account_deleted", email, name)))
    return sent


def _make_user(app, name, email, password):
    user = User(name=name, email=email, age=0)
    user.password = password
    db.session.add(user)
    db.session.flush()
    token = app.extensions["token_authority"].issue(user.id)
    user.tokens.append(UserToken(token=token))
    return user, token


@pytest.fixture()
def seeded(app):
    """Два пользователя с одним токеном каждый и три задачи."""
    base = datetime(2024, 1, 1, 12, 0, 0)
    with app.app_context():
        user_one, token_one = _make_user(app, "Rajesh", "rajesh@example.com", "Rajesh@123")
        user_two, token_two = _make_user(app, "Rahul", "rahul@example.com", "Rahul@1234")

        task_one = Task(description="First task", completed=False, owner_id=user_one.id,
                        created_at=base, updated_at=base)
        task_two = Task(description="Second task", completed=True, owner_id=user_one.id,
                        created_at=base + timedelta(minutes=1), updated_at=base + timedelta(minutes=1))
        task_three = Task(description="Third task", completed=True, owner_id=user_two.id,
                          created_at=base + timedelta(minutes=2), updated_at=base + timedelta(minutes=2))
        db.session.add_all([task_one, task_two, task_three])
        db.session.commit()

        return SimpleNamespace(
            user_one_id=user_one.id,
            user_one_password="Rajesh@123",
            user_one_email="rajesh@example.com",
            token_one=token_one,
            user_two_id=user_two.id,
            token_two=token_two,
            task_one_id=task_one.id,
            task_two_id=task_two.id,
            task_three_id=task_three.id,
        )

