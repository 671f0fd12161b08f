## Roadmap generation pipeline: match, enrich, synthesize, merge, persist
import logging
from pathlib import Path
from typing import Any, Dict, List

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.synthesizer import synthesize_roadmap
from pathfinder.db.store import RoadmapStore
from pathfinder.errors import CampusNotFound, ProfileIncomplete, ProfileNotFound
from pathfinder.pathways.courses import extract_pathway_courses, lookup_pathway_courses
from pathfinder.pathways.schemas import (
    CampusRecord,
    PathwayTemplate,
    ProfileRecord,
    SynthesizedRoadmap,
)
from pathfinder.pathways.templates import find_matching_pathway, load_pathway_templates

logger = logging.getLogger(__name__)


async def get_campus_info(store: RoadmapStore, campus_name_or_id: str) -> CampusRecord:
    """Resolve a campus by id, then by case-insensitive name or alias."""
    campus = await store.get_campus(campus_name_or_id)
    if campus:
        return campus

    wanted = campus_name_or_id.lower()
    for candidate in await store.list_campuses():
        if candidate.name.lower() == wanted:
            return candidate
        if any(alias.lower() == wanted for alias in candidate.aliases):
            return candidate

    raise CampusNotFound(campus_name_or_id)


def build_final_roadmap(
    synthesized: SynthesizedRoadmap,
    template: PathwayTemplate,
    campus: CampusRecord,
    profile: ProfileRecord,
) -> Dict[str, Any]:
    """
    Reconcile the model's document with authoritative fields.
    Synthesized top-level values win when present; profile fields are
    omitted when empty rather than stored as empty containers.
    """
    doc = synthesized.model_dump(mode="json", exclude={"years"})

    roadmap: Dict[str, Any] = {
        **doc,
        "program_name": synthesized.program_name or template.program_name,
        "institution": synthesized.institution or template.institution or campus.name,
        "total_credits": synthesized.total_credits or template.total_credits,
    }
    for key in ("career_goal", "interests", "skills"):
        roadmap.pop(key, None)

    if profile.career:
        roadmap["career_goal"] = profile.career
    if profile.interests:
        roadmap["interests"] = list(profile.interests)
    if profile.skills:
        roadmap["skills"] = list(profile.skills)

    years: List[Dict[str, Any]] = []
    if synthesized.years is not None:
        years = [year.model_dump(mode="json") for year in synthesized.years]
    roadmap["years"] = years
    return roadmap


async def _clear_roadmap(store: RoadmapStore, profile_id: int, reason: str) -> None:
    logger.info("Profile %s gets no roadmap: %s", profile_id, reason)
    await store.save_roadmap(profile_id, None)


async def generate_and_save_roadmap(
    profile_id: int,
    *,
    store: RoadmapStore,
    llm: LLMClient,
    pathways_file: str | Path,
    supported_campus_id: str,
    temperature: float = 0.2,
) -> None:
    """
    Rebuild and persist the roadmap for one profile.

    Unsupported campuses and unmatched programs store a null roadmap.
    Any raised error leaves the stored roadmap untouched.
    """
    profile = await store.get_profile(profile_id)
    if profile is None:
        raise ProfileNotFound(profile_id)

    if not (profile.college or "").strip() or not (profile.program or "").strip():
        raise ProfileIncomplete("Profile is missing required fields: college or program")

    campus = await get_campus_info(store, profile.college)

    if campus.id != supported_campus_id:
        await _clear_roadmap(store, profile_id, f"campus {campus.id} is not supported")
        return

    templates = load_pathway_templates(pathways_file)
    template = find_matching_pathway(profile.program, templates)

    if template is None:
        await _clear_roadmap(store, profile_id, f"no pathway matches program {profile.program!r}")
        return

    course_codes = extract_pathway_courses(template)
    course_data = await lookup_pathway_courses(store, course_codes, campus.id)

    synthesized = await synthesize_roadmap(llm, template, course_data, profile, temperature=temperature)

    roadmap = build_final_roadmap(synthesized, template, campus, profile)
    await store.save_roadmap(profile_id, roadmap)
    logger.info("Saved roadmap for profile %s (%s)", profile_id, roadmap["program_name"])
