"""SQLAlchemy ORM models for IntervalQuest."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, UniqueConstraint
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class UserPreset(Base):
    """A named work/rest/rounds bundle saved by one user."""

    __tablename__ = "user_presets"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_user_presets_user_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, default="local")
    name = Column(String(120), nullable=False)
    work_duration = Column(Integer, nullable=False)
    rest_duration = Column(Integer, nullable=False)
    rounds = Column(Integer, nullable=False)
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<UserPreset user={self.user_id} name={self.name!r} "
            f"{self.work_duration}/{self.rest_duration}x{self.rounds}>"
        )
