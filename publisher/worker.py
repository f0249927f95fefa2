from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from rq import SimpleWorker, Worker

from publisher.config import settings
from publisher.models.schemas import Build, PublishResult
from publisher.queue import get_queue
from publisher.services.publish_manager import PublishManager

logger = logging.getLogger(__name__)


def process_publish(
    *,
    version: str,
    files: Iterable[str],
    platform: Optional[str] = None,
    arch: Optional[str] = None,
    manager: Optional[PublishManager] = None,
) -> PublishResult:
    build = Build(version=version, platform=platform, arch=arch)
    manager = manager or PublishManager(config=settings)
    try:
        result = manager.publish(build, [str(path) for path in files])
    except Exception as exc:
        logger.exception("Publishing build %s failed: %s", version, exc)
        raise
    logger.info("Publish job for %s finished with %d files", result.build_id, len(result.urls))
    return result


def run_worker() -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    queue = get_queue()
    if os.name == "nt":
        worker = SimpleWorker([queue], connection=queue.connection)
    else:
        worker = Worker([queue], connection=queue.connection)
    worker.work(with_scheduler=True)


if __name__ == "__main__":
    run_worker()
