# Profile roadmap endpoints
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, status

from pathfinder.db.store import RoadmapStore
from pathfinder.deps import get_enqueuer, get_store

router = APIRouter(prefix="/profiles")


@router.post("/{profile_id}/roadmap", status_code=status.HTTP_202_ACCEPTED)
async def request_roadmap(
    profile_id: int,
    store: RoadmapStore = Depends(get_store),
    enqueue: Callable[[int], str] = Depends(get_enqueuer),
) -> dict[str, Any]:
    profile = await store.get_profile(profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="profile not found")

    task_id = enqueue(profile_id)
    return {"task_id": task_id, "profile_id": profile_id, "status": "queued"}


@router.get("/{profile_id}/roadmap")
async def get_roadmap(profile_id: int, store: RoadmapStore = Depends(get_store)) -> dict[str, Any]:
    profile = await store.get_profile(profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="profile not found")
    return {"profile_id": profile_id, "roadmap": profile.roadmap}
