import json
from typing import Any, List

import pytest

from pathfinder.agents.llm.base import LLMClient
from pathfinder.db.store import RoadmapStore
from pathfinder.pathways.schemas import CampusRecord, CatalogCourse, PathwayTemplate, ProfileRecord


class FakeStore(RoadmapStore):
    def __init__(self, profiles=(), campuses=(), courses=(), failing_codes=()):
        self.profiles = {p.id: p for p in profiles}
        self.campuses = list(campuses)
        self.courses = list(courses)
        self.failing_codes = set(failing_codes)
        self.saved: List[tuple] = []
        self.course_queries: List[tuple] = []

    async def get_profile(self, profile_id):
        return self.profiles.get(profile_id)

    async def get_campus(self, campus_id):
        return next((c for c in self.campuses if c.id == campus_id), None)

    async def list_campuses(self):
        return list(self.campuses)

    async def find_courses(self, campus_id, prefix, number):
        self.course_queries.append((campus_id, prefix, number))
        if f"{prefix} {number}" in self.failing_codes:
            raise RuntimeError("connection reset")
        return [c for c in self.courses if c.campus_id == campus_id]

    async def save_roadmap(self, profile_id, roadmap):
        self.saved.append((profile_id, roadmap))
        profile = self.profiles[profile_id]
        self.profiles[profile_id] = profile.model_copy(update={"roadmap": roadmap})


class FakeLLM(LLMClient):
    def __init__(self, response: Any):
        self.response = response
        self.calls: List[dict] = []

    def generate_text(self, *, system, user, temperature=0.2):
        self.calls.append({"system": system, "user": user, "temperature": temperature})
        if callable(self.response):
            return self.response(user)
        return self.response


TEMPLATE_DATA = {
    "program_name": "Computer Science, B.S.",
    "institution": "University of Hawaii at Manoa",
    "total_credits": 120,
    "years": [
        {
            "year_number": 1,
            "semesters": [
                {
                    "semester_name": "fall_semester",
                    "credits": 11,
                    "courses": [
                        {"name": "ICS 111", "credits": 4},
                        {"name": "MATH 215 or 241", "credits": 4},
                        {"name": "FW (or FQ)", "credits": 3},
                    ],
                },
                {
                    "semester_name": "spring_semester",
                    "credits": 7,
                    "courses": [
                        {"name": "ICS 211", "credits": 4},
                        {"name": "Elective", "credits": 3},
                    ],
                },
            ],
        }
    ],
}


def model_output(**overrides) -> dict:
    """A well-behaved model answer for TEMPLATE_DATA."""
    activities = ["Join the ACM student chapter.", "Build a small Python project."]
    milestones = ["Finish ICS 111 with a B or better.", "Draft a first resume."]
    doc = {
        "program_name": "Computer Science, B.S.",
        "institution": "University of Hawaii at Manoa",
        "total_credits": 120,
        "years": [
            {
                "year_number": 1,
                "semesters": [
                    {
                        "semester_name": "fall_semester",
                        "credits": 11,
                        "courses": [
                            {"name": "ICS 111", "credits": 4,
                             "isRelated": [{"type": "skill", "value": "Python"}]},
                            {"name": "MATH 241", "credits": 4, "isRelated": None},
                            {"name": "FW (or FQ)", "credits": 3, "isRelated": None},
                        ],
                        "activities": activities,
                        "milestones": milestones,
                    },
                    {
                        "semester_name": "spring_semester",
                        "credits": 7,
                        "courses": [
                            {"name": "ICS 211", "credits": 4,
                             "isRelated": [{"type": "career", "value": "Software Engineer"}]},
                            {"name": "Elective", "credits": 3, "isRelated": None},
                        ],
                        "activities": [{"text": "Attend a hackathon."}, "Pair program weekly."],
                        "milestones": ["Complete ICS 211.", "  ", "Apply for a summer internship."],
                    },
                ],
            }
        ],
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def template() -> PathwayTemplate:
    return PathwayTemplate.model_validate(TEMPLATE_DATA)


@pytest.fixture
def pathways_file(tmp_path):
    other = dict(TEMPLATE_DATA, program_name="Mathematics, B.A.")
    path = tmp_path / "pathways.json"
    path.write_text(json.dumps([other, TEMPLATE_DATA]), encoding="utf-8")
    return path


@pytest.fixture
def profile() -> ProfileRecord:
    return ProfileRecord(
        id=1,
        college="UH Manoa",
        program="Computer Science, B.S.",
        career="Software Engineer",
        interests=["Machine Learning"],
        skills=["Python"],
        roadmap={"stale": True},
    )


@pytest.fixture
def campuses() -> List[CampusRecord]:
    return [
        CampusRecord(id="uh_hilo", name="University of Hawaii at Hilo", aliases=["UH Hilo"]),
        CampusRecord(id="uh_manoa", name="University of Hawaii at Manoa", aliases=["UH Manoa", "Manoa"]),
    ]


@pytest.fixture
def catalog() -> List[CatalogCourse]:
    return [
        CatalogCourse(campus_id="uh_manoa", course_prefix="ICS", course_number="111",
                      course_title="Introduction to Computer Science I",
                      course_desc="Programming in Python and Java.", num_units="4"),
        CatalogCourse(campus_id="uh_manoa", course_prefix="MATH", course_number="241",
                      course_title="Calculus I", course_desc=None, num_units="4"),
        CatalogCourse(campus_id="uh_hilo", course_prefix="ICS", course_number="111",
                      course_title="Hilo Intro", course_desc=None, num_units="3"),
    ]


@pytest.fixture
def store(profile, campuses, catalog) -> FakeStore:
    return FakeStore(profiles=[profile], campuses=campuses, courses=catalog)
