## Student profile table
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from pathfinder.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    college: Mapped[str | None] = mapped_column(String(200), nullable=True)   # campus id, name or alias
    program: Mapped[str | None] = mapped_column(String(200), nullable=True)
    career: Mapped[str | None] = mapped_column(String(200), nullable=True)
    interests: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    skills: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    roadmap: Mapped[dict[str, Any] | None] = mapped_column(JSON(none_as_null=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
