from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from rq import Queue

from publisher.api.deps import get_app_settings, get_publish_queue, get_transport
from publisher.api.security import require_token
from publisher.config import Settings
from publisher.models import BuildList, PublishJob, PublishRequest
from publisher.services.publish_manager import PublishManager
from publisher.transport import LocalPublishTransport

router = APIRouter(dependencies=[Depends(require_token)])


@router.get("", response_model=BuildList)
async def list_builds(transport: LocalPublishTransport = Depends(get_transport)) -> BuildList:
    return BuildList(builds=sorted(transport.fetch_builds_list()))


@router.get("/updates")
async def get_updates(transport: LocalPublishTransport = Depends(get_transport)) -> Any:
    return transport.fetch_updates_json()


@router.post("", response_model=PublishJob, status_code=status.HTTP_202_ACCEPTED)
async def enqueue_publish(
    payload: PublishRequest,
    transport: LocalPublishTransport = Depends(get_transport),
    queue: Queue = Depends(get_publish_queue),
    config: Settings = Depends(get_app_settings),
) -> PublishJob:
    missing = [path for path in payload.files if not Path(path).is_file()]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Artifact files not found: {', '.join(missing)}",
        )

    job = queue.enqueue(
        "publisher.worker.process_publish",
        version=payload.version,
        platform=payload.platform,
        arch=payload.arch,
        files=payload.files,
        job_timeout=config.job_timeout_seconds,
    )
    return PublishJob(job_id=str(job.id), build_id=transport.get_build_id(payload))


@router.delete("/{build_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_build(build_id: str, transport: LocalPublishTransport = Depends(get_transport)) -> None:
    if build_id not in transport.fetch_builds_list():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Build {build_id} not found")
    PublishManager(transport).remove(build_id)
