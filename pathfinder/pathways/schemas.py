## Pydantic schemas for pathway templates, store records and generated roadmaps
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SemesterName = Literal["fall_semester", "spring_semester", "summer_semester"]
RELATION_TYPES = ("skill", "interest", "career")


# -------------------------
# Pathway templates (static catalog)
# -------------------------
class CourseSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    credits: int | float


class PathwaySemester(BaseModel):
    model_config = ConfigDict(frozen=True)

    semester_name: SemesterName
    credits: int | float
    courses: List[CourseSlot]


class PathwayYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_number: int
    semesters: List[PathwaySemester]


class PathwayTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    program_name: str
    institution: str
    total_credits: int | float
    years: List[PathwayYear]


# -------------------------
# Store records
# -------------------------
class ProfileRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    college: str | None = None
    program: str | None = None
    career: str | None = None
    interests: List[str] | None = None
    skills: List[str] | None = None
    roadmap: dict[str, Any] | None = None


class CampusRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    aliases: List[str] = Field(default_factory=list)

    @field_validator("aliases", mode="before")
    @classmethod
    def _aliases_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


class CatalogCourse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    campus_id: str
    course_prefix: str
    course_number: str
    course_title: str
    course_desc: str | None = None
    num_units: str | None = None

    @property
    def code(self) -> str:
        return f"{self.course_prefix} {self.course_number}"


class CourseInfo(BaseModel):
    """Catalog metadata handed to the model as context."""

    code: str
    title: str
    description: str | None = None
    units: str | None = None


# -------------------------
# Synthesized roadmap (untrusted model output)
# -------------------------
def normalize_string_list(value: Any) -> List[str]:
    """
    Coerce a model-provided list into plain trimmed strings.
    Entries may be strings or objects like {"text": "..."}; anything else is
    stringified. Empty entries are dropped; a non-list becomes [].
    """
    if not isinstance(value, list):
        return []

    out = []
    for item in value:
        if isinstance(item, str):
            text = item
        elif isinstance(item, dict) and isinstance(item.get("text"), str):
            text = item["text"]
        else:
            text = str(item)
        text = text.strip()
        if text:
            out.append(text)
    return out


class RelationTag(BaseModel):
    type: Literal["skill", "interest", "career"]
    value: str = Field(min_length=1)


class ResolvedCourse(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    credits: int | float | None = None
    isRelated: List[RelationTag] | None = None

    @field_validator("isRelated", mode="before")
    @classmethod
    def _coerce_relations(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, dict):
            value = [value]
        if not isinstance(value, list):
            return None

        # context["profile_terms"] maps (type, lowercased term) -> verbatim profile text
        terms = (info.context or {}).get("profile_terms")
        tags = []
        for item in value:
            if not isinstance(item, dict):
                continue
            kind = item.get("type")
            text = item.get("value")
            if kind not in RELATION_TYPES or not isinstance(text, str) or not text.strip():
                continue
            if terms is not None:
                verbatim = terms.get((kind, text.strip().lower()))
                if verbatim is None:
                    continue
                text = verbatim
            tags.append({"type": kind, "value": text})
        return tags or None


class ResolvedSemester(BaseModel):
    model_config = ConfigDict(extra="allow")

    semester_name: str | None = None
    credits: int | float | None = None
    courses: List[ResolvedCourse] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    milestones: List[str] = Field(default_factory=list)

    @field_validator("activities", "milestones", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> List[str]:
        return normalize_string_list(value)


class ResolvedYear(BaseModel):
    model_config = ConfigDict(extra="allow")

    year_number: int | None = None
    semesters: List[ResolvedSemester] = Field(default_factory=list)


class SynthesizedRoadmap(BaseModel):
    model_config = ConfigDict(extra="allow")

    program_name: str | None = None
    institution: str | None = None
    total_credits: int | float | None = None
    years: List[ResolvedYear] | None = None
