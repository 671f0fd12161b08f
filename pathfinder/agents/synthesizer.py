# pathfinder/agents/synthesizer.py
"""
Model-assisted roadmap synthesis.

One model call resolves every choice slot of the matched pathway to a single
course, tags courses that serve the student's profile, and writes activities
and milestones per semester. The response is untrusted: it is parsed into a
raw object first, then checked against the template and coerced field by
field before anything downstream sees it.
"""
import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from pathfinder.agents.llm.base import LLMClient
from pathfinder.errors import SynthesisParseError, SynthesisValidationError
from pathfinder.pathways.courses import is_choice_slot, match_slot_option, slot_options
from pathfinder.pathways.schemas import (
    CourseInfo,
    PathwayTemplate,
    ProfileRecord,
    SynthesizedRoadmap,
)

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
MIN_SEMESTER_ITEMS = 2

SYSTEM_SYNTHESIZER = """You are an academic advisor building a personalized degree roadmap.

You must return ONLY one valid JSON object (no markdown, no code fences, no commentary).
The object must keep the exact structure of the pathway template you are given.
"""


def _join_or_placeholder(values: List[str] | None) -> str:
    cleaned = [v for v in (values or []) if v and v.strip()]
    return ", ".join(cleaned) if cleaned else NOT_SPECIFIED


def format_course_catalog(course_data: Dict[str, CourseInfo]) -> str:
    entries = []
    for info in course_data.values():
        desc = f"\n  Description: {info.description}" if info.description else ""
        entries.append(f"{info.code}: {info.title}{desc}")
    return "\n\n".join(entries)


def build_synthesis_prompt(
    template: PathwayTemplate,
    course_data: Dict[str, CourseInfo],
    profile: ProfileRecord,
) -> str:
    course_list = format_course_catalog(course_data) or "No course data available"
    template_json = json.dumps(template.model_dump(mode="json"), indent=2)

    return f"""
Personalize this degree pathway for a {template.institution} student.

STUDENT PROFILE:
- Program: {profile.program or NOT_SPECIFIED}
- Career Goal: {profile.career or NOT_SPECIFIED}
- Interests: {_join_or_placeholder(profile.interests)}
- Skills: {_join_or_placeholder(profile.skills)}

COURSE CATALOG (courses referenced by this pathway):
{course_list}

PATHWAY TEMPLATE (JSON):
{template_json}

Rules:
1. Choice slots: when a course "name" offers several options (joined by "or", "and", "/" or commas),
   replace it with EXACTLY ONE of its options written out in full, e.g. "MATH 215 or 241" -> "MATH 241",
   "MATH 300+ or ICS 300+" -> "ICS 300+", "ICS 311 or Elective" -> "ICS 311".
   Pick the option that best fits the career goal, skills and interests, using the catalog above.
   The resolved name must not contain "or", "and" or "/".
2. Leave everything else untouched: electives ("Elective", "ICS 400+", "Elective 300+"),
   general education codes (FW, FQ, FG, DS, DA, DH, DL, DB, DP, DY, HSL) and single courses.
   Do not replace electives with specific courses.
3. Every course object gets an "isRelated" field:
   - null when the course does not serve the profile
   - otherwise an array of {{"type": "skill" | "interest" | "career", "value": "<exact text from the profile>"}}
   - only tag a course when its catalog description mentions the term,
     or its title makes the relevance unambiguous.
4. Every semester gets an "activities" array: at least 2 concrete, actionable sentences
   tied to that semester's courses and the career goal.
5. Every semester gets a "milestones" array: at least 2 measurable achievements for that semester.

Keep ALL years, ALL semesters and ALL courses in their original order.
Return the COMPLETE modified pathway as one JSON object.
""".strip()


def _extract_first_json_object(text: str) -> str | None:
    """
    Extract the first complete top-level JSON object using brace counting.
    Braces inside string literals are ignored.
    Returns the first balanced { ... } substring, or None if not found.
    """
    start = text.find("{")
    if start == -1:
        return None

    brace_count = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            brace_count += 1
        elif ch == "}":
            brace_count -= 1
            if brace_count == 0:
                return text[start:i + 1]

    return None


def parse_roadmap_response(text: str) -> Any:
    """
    Strict JSON first (what a JSON-mode provider returns), then the first
    balanced-brace substring for models that wrap the object in prose.
    """
    stripped = (text or "").strip()
    if stripped.startswith("{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    candidate = _extract_first_json_object(stripped)
    if candidate is None:
        raise SynthesisParseError("No JSON found in model response")

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise SynthesisParseError(f"Malformed JSON in model response: {e}") from e


def _profile_terms(profile: ProfileRecord) -> Dict[tuple, str]:
    terms = {}
    for kind, values in (("skill", profile.skills), ("interest", profile.interests)):
        for value in values or []:
            if value and value.strip():
                terms[(kind, value.strip().lower())] = value
    if profile.career and profile.career.strip():
        terms[("career", profile.career.strip().lower())] = profile.career
    return terms


def resolve_slot_name(template_name: str, proposed: Any) -> str:
    """
    Non-choice slots keep the template's name verbatim. Choice slots keep the
    model's pick when it names one of the slot's options, else the first option.
    """
    if not is_choice_slot(template_name):
        return template_name

    options = slot_options(template_name)
    pick = match_slot_option(options, proposed)
    if pick is not None:
        return pick

    logger.warning("Unresolved choice slot %r (model returned %r); using %s", template_name, proposed, options[0])
    return options[0]


def _expect_list(value: Any, size: int, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise SynthesisValidationError(f"{where}: expected a list, got {type(value).__name__}")
    if len(value) != size:
        raise SynthesisValidationError(f"{where}: expected {size} items, got {len(value)}")
    return value


def _expect_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SynthesisValidationError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _align_years(raw_years: Any, template: PathwayTemplate) -> List[Dict[str, Any]]:
    years = []
    for yi, (raw_year, t_year) in enumerate(
        zip(_expect_list(raw_years, len(template.years), "years"), template.years)
    ):
        raw_year = _expect_object(raw_year, f"years[{yi}]")
        semesters = []
        raw_semesters = _expect_list(raw_year.get("semesters"), len(t_year.semesters), f"years[{yi}].semesters")
        for si, (raw_sem, t_sem) in enumerate(zip(raw_semesters, t_year.semesters)):
            where = f"years[{yi}].semesters[{si}]"
            raw_sem = _expect_object(raw_sem, where)
            courses = []
            raw_courses = _expect_list(raw_sem.get("courses"), len(t_sem.courses), f"{where}.courses")
            for ci, (raw_course, slot) in enumerate(zip(raw_courses, t_sem.courses)):
                if isinstance(raw_course, str):
                    raw_course = {"name": raw_course}
                raw_course = _expect_object(raw_course, f"{where}.courses[{ci}]")
                courses.append({
                    **raw_course,
                    "name": resolve_slot_name(slot.name, raw_course.get("name")),
                    "credits": slot.credits,
                    "isRelated": raw_course.get("isRelated"),
                })
            semesters.append({
                **raw_sem,
                "semester_name": t_sem.semester_name,
                "credits": t_sem.credits,
                "courses": courses,
            })
        years.append({**raw_year, "year_number": t_year.year_number, "semesters": semesters})
    return years


def normalize_roadmap(raw: Any, template: PathwayTemplate, profile: ProfileRecord) -> SynthesizedRoadmap:
    data = dict(_expect_object(raw, "roadmap"))

    if data.get("years") is None:
        logger.warning("Model response for %r has no years", template.program_name)
        data.pop("years", None)
    else:
        data["years"] = _align_years(data["years"], template)

    try:
        roadmap = SynthesizedRoadmap.model_validate(data, context={"profile_terms": _profile_terms(profile)})
    except ValidationError as e:
        raise SynthesisValidationError(f"Model response has an unexpected shape: {e}") from e

    for year in roadmap.years or []:
        for semester in year.semesters:
            if len(semester.activities) < MIN_SEMESTER_ITEMS or len(semester.milestones) < MIN_SEMESTER_ITEMS:
                logger.warning(
                    "Year %s %s has %d activities and %d milestones",
                    year.year_number, semester.semester_name,
                    len(semester.activities), len(semester.milestones),
                )
    return roadmap


async def synthesize_roadmap(
    llm: LLMClient,
    template: PathwayTemplate,
    course_data: Dict[str, CourseInfo],
    profile: ProfileRecord,
    *,
    temperature: float = 0.2,
) -> SynthesizedRoadmap:
    prompt = build_synthesis_prompt(template, course_data, profile)

    logger.info("Synthesizing roadmap for profile %s (%s)", profile.id, template.program_name)
    raw_text = await llm.agenerate_json(system=SYSTEM_SYNTHESIZER, user=prompt, temperature=temperature)

    raw = parse_roadmap_response(raw_text)
    return normalize_roadmap(raw, template, profile)
