import asyncio
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pathfinder.db.base import Base
from pathfinder.db.models.campus import Campus
from pathfinder.db.models.course import Course
from pathfinder.db.models.profile import Profile
from pathfinder.db.store import SqlAlchemyRoadmapStore

# SQLite hands DateTime columns back without tzinfo
OLD_TIMESTAMP = datetime(2020, 1, 1)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    db = factory()
    db.add_all([
        Campus(id="uh_manoa", name="University of Hawaii at Manoa", aliases=["UH Manoa"]),
        Campus(id="uh_hilo", name="University of Hawaii at Hilo", aliases=None),
    ])
    db.flush()
    db.add_all([
        Course(campus_id="uh_manoa", course_prefix="ICS", course_number="111",
               course_title="Introduction to Computer Science I", course_desc="Python.", num_units="4"),
        Course(campus_id="uh_hilo", course_prefix="ICS", course_number="111",
               course_title="Hilo Intro", num_units="3"),
        Course(campus_id="uh_manoa", course_prefix="ICS", course_number="211",
               course_title="Introduction to Computer Science II", num_units="4"),
        Profile(id=7, college="UH Manoa", program="Computer Science, B.S.",
                career="Data Scientist", interests=["AI"], skills=["SQL"], roadmap={"old": 1}),
    ])
    db.commit()
    db.close()
    yield factory
    engine.dispose()


def test_reads_profile_and_campuses(session_factory):
    store = SqlAlchemyRoadmapStore(session_factory)

    profile = asyncio.run(store.get_profile(7))
    assert profile.program == "Computer Science, B.S."
    assert profile.interests == ["AI"]
    assert asyncio.run(store.get_profile(8)) is None

    assert asyncio.run(store.get_campus("uh_manoa")).aliases == ["UH Manoa"]
    campuses = {c.id: c for c in asyncio.run(store.list_campuses())}
    assert campuses["uh_hilo"].aliases == []


def test_find_courses_is_scoped(session_factory):
    store = SqlAlchemyRoadmapStore(session_factory)
    rows = asyncio.run(store.find_courses("uh_manoa", "ICS", "111"))
    assert [(r.code, r.course_title) for r in rows] == [("ICS 111", "Introduction to Computer Science I")]


def _set_updated_at(session_factory, when):
    db = session_factory()
    db.get(Profile, 7).updated_at = when
    db.commit()
    db.close()


def _updated_at(session_factory):
    db = session_factory()
    value = db.get(Profile, 7).updated_at
    db.close()
    return value


@pytest.mark.parametrize("roadmap", [
    {"program_name": "Computer Science, B.S.", "years": []},
    None,
])
def test_save_roadmap_updates_document_and_timestamp(session_factory, roadmap):
    store = SqlAlchemyRoadmapStore(session_factory)
    _set_updated_at(session_factory, OLD_TIMESTAMP)
    before = _updated_at(session_factory)

    asyncio.run(store.save_roadmap(7, roadmap))

    assert asyncio.run(store.get_profile(7)).roadmap == roadmap
    assert _updated_at(session_factory) > before


def test_save_null_after_document_bumps_timestamp_each_time(session_factory):
    store = SqlAlchemyRoadmapStore(session_factory)

    _set_updated_at(session_factory, OLD_TIMESTAMP)
    asyncio.run(store.save_roadmap(7, {"years": []}))
    assert _updated_at(session_factory) > OLD_TIMESTAMP

    _set_updated_at(session_factory, OLD_TIMESTAMP)
    asyncio.run(store.save_roadmap(7, None))
    assert asyncio.run(store.get_profile(7)).roadmap is None
    assert _updated_at(session_factory) > OLD_TIMESTAMP
