## Course reference extraction and catalog enrichment
import logging
import re
from typing import Any, Dict, Iterable, List, Set, Tuple

from pathfinder.db.store import RoadmapStore
from pathfinder.pathways.schemas import CourseInfo, PathwayTemplate

logger = logging.getLogger(__name__)

# prefix = [A-Z]+, number = \d+[A-Z]*
COURSE_CODE_RE = re.compile(r"([A-Z]+)\s+(\d+[A-Z]*)")
_FULL_CODE_RE = re.compile(r"^([A-Z]+)\s+(\d+[A-Z]*)$")

_CONNECTIVE_RE = re.compile(r"\bor\b|\band\b|/|,", re.IGNORECASE)
_CONNECTIVE_SPLIT_RE = re.compile(r"\s+(?:or|and)\s+|\s*[/,]\s*", re.IGNORECASE)
# Options keep the elective "+" marker ("ICS 300+")
_OPTION_CODE_RE = re.compile(r"^([A-Z]+)\s+(\d+[A-Z]*\+?)$")
_BARE_NUMBER_RE = re.compile(r"^\d+[A-Z]*\+?$")
# Trailing title or note after a picked option: "MATH 241 - Calculus I", "MATH 241: Calculus I"
_PICK_SUFFIX_RE = re.compile(r"(?:\s*:|\s+[-–(]).*$")


def extract_pathway_courses(template: PathwayTemplate) -> Set[str]:
    """
    Every course-code-shaped token in every slot name, as "PREFIX NUMBER",
    plus the prefix-less options of choice slots ("MATH 215 or 241" -> MATH 241).
    """
    codes = set()
    for year in template.years:
        for semester in year.semesters:
            for slot in semester.courses:
                for text in [slot.name, *slot_options(slot.name)]:
                    for prefix, number in COURSE_CODE_RE.findall(text):
                        codes.add(f"{prefix} {number}")
    return codes


def split_course_code(code: str) -> Tuple[str, str] | None:
    match = _FULL_CODE_RE.match(code.strip())
    if not match:
        return None
    return match.group(1), match.group(2)


def slot_options(name: str) -> List[str]:
    """
    The options offered by a slot joined with "or", "and", "/" or commas, in order.
    Bare numbers borrow the last seen prefix and non-course options are kept:
    "MATH 215 or 241" -> ["MATH 215", "MATH 241"],
    "ICS 311 or Elective" -> ["ICS 311", "Elective"].
    A slot without a connective has no options.
    """
    if not _CONNECTIVE_RE.search(name):
        return []

    options: List[str] = []
    prefix = None
    for token in _CONNECTIVE_SPLIT_RE.split(name):
        token = " ".join(token.strip(" ()").split())
        if not token:
            continue
        match = _OPTION_CODE_RE.match(token)
        if match:
            prefix = match.group(1)
            token = f"{prefix} {match.group(2)}"
        elif prefix and _BARE_NUMBER_RE.match(token):
            token = f"{prefix} {token}"
        if token not in options:
            options.append(token)
    return options


def is_choice_slot(name: str) -> bool:
    """Two or more options, at least one of them a course. "DA/DH/DL" is not a choice."""
    options = slot_options(name)
    return len(options) > 1 and any(COURSE_CODE_RE.search(o) for o in options)


def _option_key(text: str) -> str:
    return " ".join(text.split()).upper()


def match_slot_option(options: List[str], proposed: Any) -> str | None:
    """The option a model pick names, ignoring case, spacing and a trailing title."""
    if not isinstance(proposed, str):
        return None
    by_key = {_option_key(o): o for o in options}
    pick = proposed.strip()
    return by_key.get(_option_key(_PICK_SUFFIX_RE.sub("", pick))) or by_key.get(_option_key(pick))


async def lookup_pathway_courses(
    store: RoadmapStore,
    course_codes: Iterable[str],
    campus_id: str,
) -> Dict[str, CourseInfo]:
    """
    Fetch catalog metadata for each code, one lookup at a time.
    A failing lookup is logged and skipped; the result may be partial.
    """
    course_map: Dict[str, CourseInfo] = {}

    queries = [q for q in (split_course_code(code) for code in sorted(course_codes)) if q]
    if not queries:
        return course_map

    for prefix, number in queries:
        try:
            rows = await store.find_courses(campus_id, prefix, number)
        except Exception:
            logger.exception("Error querying course %s %s", prefix, number)
            continue

        for row in rows:
            if row.course_prefix != prefix or row.course_number != number:
                continue
            course_map[row.code] = CourseInfo(
                code=row.code,
                title=row.course_title,
                description=row.course_desc,
                units=row.num_units,
            )

    logger.info("Enriched %d of %d pathway course codes for campus %s", len(course_map), len(queries), campus_id)
    return course_map
