import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from publisher.config import Settings, settings
from publisher.models.schemas import Build, PublishedBuild, PublishResult
from publisher.transport import LocalPublishTransport, PublishTransport

logger = logging.getLogger(__name__)

_TIMESTAMP = TypeAdapter(datetime)
_UNKNOWN_PUBLISH_TIME = datetime.min.replace(tzinfo=timezone.utc)


class PublishManager:
    """Publishes builds through a transport and keeps the updates manifest in step."""

    def __init__(self, transport: Optional[PublishTransport] = None, config: Optional[Settings] = None) -> None:
        self.transport = transport or LocalPublishTransport(config or settings)

    def publish(self, build: Build, files: Iterable[str]) -> PublishResult:
        files = list(files)
        if not files:
            raise ValueError("At least one file must be provided to PublishManager.publish")

        build_id = self.transport.get_build_id(build)
        urls: List[str] = [self.transport.upload_file(path, build) for path in files]

        manifest = self._load_manifest()
        manifest[build_id] = PublishedBuild(
            build_id=build_id,
            version=build.version,
            platform=build.platform,
            arch=build.arch,
            files=urls,
            published_at=datetime.now(timezone.utc),
        ).model_dump(mode="json")
        self.transport.push_updates_json(manifest)

        logger.info("Build %s published with %d files", build_id, len(urls))
        return PublishResult(build_id=build_id, urls=urls)

    def remove(self, build: Any) -> None:
        build_id = self.transport.get_build_id(build)
        self.transport.remove_build(build_id)

        manifest = self._load_manifest()
        if manifest.pop(build_id, None) is not None:
            self.transport.push_updates_json(manifest)

    def prune(self, keep: int) -> List[str]:
        """Remove all but the `keep` most recently published builds."""
        if keep < 0:
            raise ValueError("keep must not be negative")

        manifest = self._load_manifest()
        ordered = sorted(
            self.transport.fetch_builds_list(),
            key=lambda build_id: (self._published_at(manifest, build_id), build_id),
            reverse=True,
        )
        stale = ordered[keep:]
        for build_id in stale:
            self.remove(build_id)
        if stale:
            logger.info("Pruned %d builds: %s", len(stale), ", ".join(stale))
        return stale

    def _load_manifest(self) -> Dict[str, Any]:
        fetch = getattr(self.transport, "fetch_updates_json", None)
        manifest = fetch() if fetch else {}
        return dict(manifest) if isinstance(manifest, dict) else {}

    @staticmethod
    def _published_at(manifest: Dict[str, Any], build_id: str) -> datetime:
        entry = manifest.get(build_id)
        if not isinstance(entry, dict) or not entry.get("published_at"):
            return _UNKNOWN_PUBLISH_TIME
        try:
            published_at = _TIMESTAMP.validate_python(entry["published_at"])
        except ValidationError:
            return _UNKNOWN_PUBLISH_TIME
        if published_at.tzinfo is None:
            published_at = published_at.replace(tzinfo=timezone.utc)
        return published_at
