## Course catalog table
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pathfinder.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    campus_id: Mapped[str] = mapped_column(String(50), ForeignKey("campuses.id", ondelete="CASCADE"), index=True)

    course_prefix: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    course_number: Mapped[str] = mapped_column(String(20), nullable=False)
    course_title: Mapped[str] = mapped_column(String(300), nullable=False)
    course_desc: Mapped[str | None] = mapped_column(Text, nullable=True)
    num_units: Mapped[str | None] = mapped_column(String(20), nullable=True)  # "3" or ranges like "1-3"
