from pathfinder.pathways.schemas import PathwayTemplate
from pathfinder.pathways.templates import find_matching_pathway, load_pathway_templates
from pathfinder.settings import DEFAULT_PATHWAYS_FILE


def _templates(*names):
    return [
        PathwayTemplate(program_name=name, institution="UH", total_credits=120, years=[])
        for name in names
    ]


def test_exact_match_is_case_and_whitespace_insensitive():
    templates = _templates("Computer Engineering, B.S.", "Computer Science, B.S.")
    match = find_matching_pathway("  computer science, b.s. ", templates)
    assert match.program_name == "Computer Science, B.S."


def test_exact_match_beats_earlier_substring_match():
    templates = _templates("Computer Science, B.S. (Data Science Track)", "Computer Science, B.S.")
    match = find_matching_pathway("Computer Science, B.S.", templates)
    assert match.program_name == "Computer Science, B.S."


def test_template_name_containing_input_matches_first_in_catalog_order():
    templates = _templates("Mathematics, B.A.", "Computer Science, B.S.", "Computer Science, B.A.")
    match = find_matching_pathway("Computer Science", templates)
    assert match.program_name == "Computer Science, B.S."


def test_input_containing_template_name_matches():
    templates = _templates("Mathematics, B.A.", "Computer Science")
    match = find_matching_pathway("Computer Science, B.S. (Honors)", templates)
    assert match.program_name == "Computer Science"


def test_no_match_returns_none():
    assert find_matching_pathway("Marine Biology, B.S.", _templates("Mathematics, B.A.")) is None
    assert find_matching_pathway("Anything", []) is None


def test_packaged_catalog_loads():
    templates = load_pathway_templates(DEFAULT_PATHWAYS_FILE)
    names = [t.program_name for t in templates]
    assert "Computer Science, B.S." in names
    cs = find_matching_pathway("Computer Science, B.S.", templates)
    assert len(cs.years) == 4
    assert all(s.semester_name in ("fall_semester", "spring_semester", "summer_semester")
               for y in cs.years for s in y.semesters)


def test_load_from_file(pathways_file):
    templates = load_pathway_templates(pathways_file)
    assert [t.program_name for t in templates] == ["Mathematics, B.A.", "Computer Science, B.S."]
