"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: models/user.py – модель пользователя системы.

Назначение модуля:
- Описание ORM-модели User для работы с таблицей пользователей в базе данных.
- Хранение учётных данных (email, хеш пароля), аватара и связей с токенами и задачами.
- Автоматическое хеширование пароля при каждом его изменении.
"""

import uuid
from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db


def _new_id() -> str:
    return uuid.uuid4().hex


class User(UserMixin, db.Model):
    """Класс `User` описывает владельца задач и его активные сессии."""
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    age = db.Column(db.Integer, nullable=False, default=0)
    avatar = db.Column(db.LargeBinary, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    tokens = db.relationship(
        "UserToken",
        back_populates="user",
        order_by="UserToken.id",
        cascade="all, delete-orphan",
    )
    tasks = db.relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def password(self):
        raise AttributeError("Пароль хранится только в виде хеша")

    @password.setter
    def password(self, raw_password: str):
        # Повторное присвоение того же пароля не меняет хеш
        if self.password_hash and check_password_hash(self.password_hash, raw_password):
            return
        self.password_hash = generate_password_hash(raw_password, method="scrypt")

    def check_password(self, raw_password: str) -> bool:
        return check_password_hash(self.password_hash, raw_password)

    def has_token(self, token: str) -> bool:
        return any(entry.token == token for entry in self.tokens)

    def to_dict(self) -> dict:
        """Публичное представление без пароля, токенов и аватара."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
