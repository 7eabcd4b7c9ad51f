"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: models/user_token.py – выданные пользователю Bearer-токены.
"""

from datetime import datetime

from extensions import db


class UserToken(db.Model):
    """Одна активная сессия пользователя; удаляется при выходе."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(32), db.ForeignKey("user.id"), nullable=False, index=True)
    token = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", back_populates="tokens")
