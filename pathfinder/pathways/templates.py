## Pathway template catalog: loading and program-name matching
import json
import logging
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from pathfinder.pathways.schemas import PathwayTemplate

logger = logging.getLogger(__name__)

_templates_adapter = TypeAdapter(List[PathwayTemplate])


def load_pathway_templates(path: str | Path) -> List[PathwayTemplate]:
    """Load and validate every pathway template in the catalog file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    templates = _templates_adapter.validate_python(data)
    logger.debug("Loaded %d pathway templates from %s", len(templates), path)
    return templates


def find_matching_pathway(
    program_name: str,
    templates: List[PathwayTemplate],
) -> PathwayTemplate | None:
    """
    Match a free-text program name (e.g. "Computer Science, B.S.") to a template.
    Tiers, first hit wins, catalog order within a tier:
    exact match, template name contains the input, input contains the template name.
    """
    normalized = program_name.lower().strip()
    names = [(t, t.program_name.lower().strip()) for t in templates]

    for template, name in names:
        if name == normalized:
            return template

    for template, name in names:
        if normalized in name:
            return template

    for template, name in names:
        if name in normalized:
            return template

    return None
