## Store port for the roadmap pipeline + SQLAlchemy implementation
import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import update
from sqlalchemy.orm import Session, sessionmaker

from pathfinder.db.models.campus import Campus
from pathfinder.db.models.course import Course
from pathfinder.db.models.profile import Profile
from pathfinder.pathways.schemas import CampusRecord, CatalogCourse, ProfileRecord


class RoadmapStore(ABC):
    @abstractmethod
    async def get_profile(self, profile_id: int) -> ProfileRecord | None:
        raise NotImplementedError

    @abstractmethod
    async def get_campus(self, campus_id: str) -> CampusRecord | None:
        raise NotImplementedError

    @abstractmethod
    async def list_campuses(self) -> List[CampusRecord]:
        raise NotImplementedError

    @abstractmethod
    async def find_courses(self, campus_id: str, prefix: str, number: str) -> List[CatalogCourse]:
        raise NotImplementedError

    @abstractmethod
    async def save_roadmap(self, profile_id: int, roadmap: dict[str, Any] | None) -> None:
        """Write the roadmap and bump the profile's updated_at in one update."""
        raise NotImplementedError


class SqlAlchemyRoadmapStore(RoadmapStore):
    """
    Wraps a sync sessionmaker. Each call opens its own session and runs in a
    worker thread so the event loop is never blocked on the database.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def _run(self, fn, *args):
        return await asyncio.to_thread(self._with_session, fn, *args)

    def _with_session(self, fn, *args):
        db: Session = self.session_factory()
        try:
            return fn(db, *args)
        finally:
            db.close()

    async def get_profile(self, profile_id: int) -> ProfileRecord | None:
        def q(db: Session, pid: int):
            row = db.query(Profile).filter(Profile.id == pid).first()
            return ProfileRecord.model_validate(row) if row else None

        return await self._run(q, profile_id)

    async def get_campus(self, campus_id: str) -> CampusRecord | None:
        def q(db: Session, cid: str):
            row = db.query(Campus).filter(Campus.id == cid).first()
            return CampusRecord.model_validate(row) if row else None

        return await self._run(q, campus_id)

    async def list_campuses(self) -> List[CampusRecord]:
        def q(db: Session):
            return [CampusRecord.model_validate(row) for row in db.query(Campus).all()]

        return await self._run(q)

    async def find_courses(self, campus_id: str, prefix: str, number: str) -> List[CatalogCourse]:
        def q(db: Session, cid: str, p: str, n: str):
            rows = (
                db.query(Course)
                .filter(Course.campus_id == cid, Course.course_prefix == p, Course.course_number == n)
                .all()
            )
            return [CatalogCourse.model_validate(row) for row in rows]

        return await self._run(q, campus_id, prefix, number)

    async def save_roadmap(self, profile_id: int, roadmap: dict[str, Any] | None) -> None:
        def q(db: Session, pid: int, doc):
            db.execute(
                update(Profile)
                .where(Profile.id == pid)
                .values(roadmap=doc, updated_at=datetime.now(timezone.utc))
            )
            db.commit()

        await self._run(q, profile_id, roadmap)
