#!/usr/bin/env python3
"""
Worker process for roadmap generation tasks
"""
import logging
import signal
import sys

from pathfinder.jobs.tasks import process_roadmap_generation_queue

logger = logging.getLogger("pathfinder.worker")


def signal_handler(sig, frame):
    logger.info("Worker shutting down...")
    sys.exit(0)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting roadmap generation worker...")
    try:
        process_roadmap_generation_queue()
    except KeyboardInterrupt:
        logger.info("Worker stopped by user")
    except Exception:
        logger.exception("Worker error")
        sys.exit(1)


if __name__ == "__main__":
    main()
