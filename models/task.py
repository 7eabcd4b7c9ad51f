"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: models/task.py – модель задачи.

Назначение модуля:
- Описание ORM-модели Task для хранения пользовательских задач.
- Хранение описания, признака выполнения и привязки к владельцу.
"""

import uuid
from datetime import datetime

from extensions import db


class Task(db.Model):
    """Класс `Task` описывает задачу, принадлежащую ровно одному пользователю."""
    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    description = db.Column(db.Text, nullable=False)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    owner_id = db.Column(db.String(32), db.ForeignKey("user.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    owner = db.relationship("User", back_populates="tasks")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "owner": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
