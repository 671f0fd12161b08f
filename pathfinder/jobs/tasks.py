# pathfinder/jobs/tasks.py
"""
Redis-based (reliable) task queue for roadmap generation.

Queue pattern:
- Producer LPUSH -> PENDING_Q
- Worker BRPOPLPUSH pending -> processing (atomic, reliable)
- ACK via LREM on processing
- Retry by moving back to pending with attempt increment

The pipeline itself never retries; retry policy lives here.
"""
import asyncio
import json
import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache

import redis

from pathfinder.agents.llm.client import get_llm_client
from pathfinder.db.session import get_session_factory
from pathfinder.db.store import SqlAlchemyRoadmapStore
from pathfinder.pathways.roadmap import generate_and_save_roadmap
from pathfinder.settings import settings

logger = logging.getLogger(__name__)

PENDING_Q = "roadmap_generation_queue"
PROCESSING_Q = "roadmap_generation_processing"
MAX_RETRIES = 3


@lru_cache(maxsize=1)
def get_redis() -> redis.Redis:
    # decode_responses=True returns strings instead of bytes
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)


# -------------------------
# Queue API (producer)
# -------------------------
def enqueue_roadmap_generation(profile_id: int) -> str:
    """Enqueue a roadmap rebuild for a profile and return task_id."""
    task_id = str(uuid.uuid4())
    task_data = {
        "task_id": task_id,
        "profile_id": int(profile_id),
        "attempt": 0,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    get_redis().lpush(PENDING_Q, json.dumps(task_data))
    logger.info("Queued roadmap generation task=%s profile_id=%s", task_id, profile_id)
    return task_id


# -------------------------
# Job handler (worker)
# -------------------------
def run_roadmap_generation(profile_id: int) -> None:
    store = SqlAlchemyRoadmapStore(get_session_factory())
    asyncio.run(
        generate_and_save_roadmap(
            profile_id,
            store=store,
            llm=get_llm_client(),
            pathways_file=settings.pathways_file,
            supported_campus_id=settings.supported_campus_id,
            temperature=settings.synthesis_temperature,
        )
    )


def handle_task(client: redis.Redis, task_raw: str) -> None:
    """Run one task; ACK on success, re-queue or drop on failure."""
    try:
        task = json.loads(task_raw)
        profile_id = int(task["profile_id"])
    except (ValueError, KeyError, TypeError):
        logger.error("Dropping malformed task payload: %r", task_raw)
        client.lrem(PROCESSING_Q, 1, task_raw)
        return

    logger.info("task=%s profile_id=%s attempt=%s", task.get("task_id"), profile_id, task.get("attempt"))

    try:
        run_roadmap_generation(profile_id)
    except Exception as e:
        logger.exception("Roadmap generation failed for profile %s", profile_id)

        attempt = int(task.get("attempt", 0)) + 1
        task["attempt"] = attempt
        task["last_error"] = f"{type(e).__name__}: {e}"

        client.lrem(PROCESSING_Q, 1, task_raw)
        if attempt <= MAX_RETRIES:
            logger.info("Re-queueing profile %s for retry %d/%d", profile_id, attempt, MAX_RETRIES)
            client.lpush(PENDING_Q, json.dumps(task))
        else:
            logger.error("Max retries exceeded for profile %s, giving up", profile_id)
        return

    logger.info("Task completed, removing from processing queue")
    client.lrem(PROCESSING_Q, 1, task_raw)


# -------------------------
# Worker loop (consumer)
# -------------------------
def process_roadmap_generation_queue() -> None:
    """Reliable queue consumer: pending -> processing -> ack with retries."""
    client = get_redis()
    logger.info("Starting loop. pending=%s processing=%s", PENDING_Q, PROCESSING_Q)

    while True:
        # Atomically move task from pending -> processing and block up to 30s
        task_raw = client.brpoplpush(PENDING_Q, PROCESSING_Q, timeout=30)
        if not task_raw:
            logger.debug("idle (no jobs)")
            continue
        handle_task(client, task_raw)
