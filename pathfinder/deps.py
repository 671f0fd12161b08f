## Shared FastAPI dependencies
from pathfinder.db.session import get_session_factory
from pathfinder.db.store import RoadmapStore, SqlAlchemyRoadmapStore
from pathfinder.jobs.tasks import enqueue_roadmap_generation


def get_store() -> RoadmapStore:
    return SqlAlchemyRoadmapStore(get_session_factory())


def get_enqueuer():
    return enqueue_roadmap_generation
