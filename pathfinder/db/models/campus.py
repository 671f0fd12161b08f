## Campus table
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from pathfinder.db.base import Base


class Campus(Base):
    __tablename__ = "campuses"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)  # e.g. "uh_manoa"
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    aliases: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
