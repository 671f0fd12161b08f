## Roadmap pipeline errors


class RoadmapError(Exception):
    pass


class NotFound(RoadmapError):
    pass


class ProfileNotFound(NotFound):
    def __init__(self, profile_id: int):
        super().__init__(f"Profile {profile_id} not found")
        self.profile_id = profile_id


class CampusNotFound(NotFound):
    def __init__(self, campus_ref: str):
        super().__init__(f'Campus "{campus_ref}" not found')
        self.campus_ref = campus_ref


class ProfileIncomplete(RoadmapError):
    """Profile lacks the fields needed to pick a campus and a pathway."""


class SynthesisParseError(RoadmapError):
    """The model response did not contain a parseable JSON object."""


class SynthesisValidationError(SynthesisParseError):
    """The parsed JSON does not have the shape of the matched pathway."""
