from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from publisher.storage import FileSystemStorage
from publisher.storage.filesystem import DEFAULT_CHUNK_SIZE
from publisher.transport.base import BuildLike, PublishTransport

logger = logging.getLogger(__name__)

UPDATES_JSON = "updates.json"


class LocalPublishTransport(PublishTransport):
    """Publish builds into a directory tree on the local filesystem.

    Every artifact lands at `out_path/<build id>/<normalized file name>` and
    is assumed to be served from `remote_url` with the same relative layout.
    """

    default_options: ClassVar[Dict[str, Any]] = {
        "out_path": "dist/publish",
        "copy_chunk_size": DEFAULT_CHUNK_SIZE,
    }

    def __init__(self, options: Optional[Union[Mapping[str, Any], BaseModel]] = None) -> None:
        super().__init__(options)
        if not self.options.get("out_path"):
            self.options["out_path"] = self.default_options["out_path"]
        self.storage = FileSystemStorage(
            self.options["out_path"],
            chunk_size=self.options.get("copy_chunk_size") or DEFAULT_CHUNK_SIZE,
        )

    @property
    def out_path(self) -> Path:
        return self.storage.root

    def upload_file(self, file_path: str, build: BuildLike) -> str:
        build_id = self.get_build_id(build)
        self.storage.store(file_path, build_id, self.normalize_file_name(file_path))
        url = self.get_file_url(file_path, build)
        logger.info("Published %s for build %s as %s", file_path, build_id, url)
        return url

    def push_updates_json(self, data: Any) -> None:
        target = self.storage.write_json(UPDATES_JSON, data)
        logger.info("Wrote updates manifest to %s", target)

    def fetch_updates_json(self) -> Any:
        return self.storage.read_json(UPDATES_JSON, default={})

    def fetch_builds_list(self) -> List[str]:
        return self.storage.list_builds()

    def remove_build(self, build: BuildLike) -> None:
        build_id = self.get_build_id(build)
        if self.storage.remove(build_id):
            logger.info("Removed build %s", build_id)
        else:
            logger.debug("Build %s is not published, nothing to remove", build_id)

    def get_out_file_path(self, local_file_path: str, build: BuildLike) -> str:
        return posixpath.join(
            self.out_path.as_posix(),
            self.get_build_id(build),
            self.normalize_file_name(local_file_path),
        )

    def get_file_url(self, local_file_path: str, build: BuildLike) -> str:
        url = str(self.require_option("remote_url"))
        if url.endswith("/"):
            url = url[:-1]

        return "/".join([url, self.get_build_id(build), self.normalize_file_name(local_file_path)])
