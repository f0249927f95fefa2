from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from publisher.models.schemas import Build

BuildLike = Union[Build, Mapping[str, Any], str]

_WHITESPACE = re.compile(r"\s+")


class PublishError(Exception):
    """Base exception for publishing failures."""


class TransportConfigError(PublishError, ValueError):
    """Raised when a transport is missing an option an operation depends on."""


class PublishTransport(ABC):
    """Common behaviour for every hosting backend a build can be published to.

    Subclasses receive the merged configuration in `self.options` and
    implement the storage operations against their own hosting provider.
    """

    default_options: ClassVar[Dict[str, Any]] = {}

    def __init__(self, options: Optional[Union[Mapping[str, Any], BaseModel]] = None) -> None:
        if isinstance(options, BaseModel):
            supplied = options.model_dump()
        else:
            supplied = dict(options or {})
        merged = dict(self.default_options)
        merged.update({key: value for key, value in supplied.items() if value is not None})
        self.options: Dict[str, Any] = merged

    def get_build_id(self, build: BuildLike) -> str:
        if isinstance(build, str):
            return build
        if not isinstance(build, Build):
            build = Build.model_validate(build)
        if build.platform and build.arch:
            return f"{build.platform}-{build.arch}-v{build.version}"
        return build.version

    def normalize_file_name(self, file_name: Union[str, "os.PathLike[str]"]) -> str:
        name = os.path.basename(os.fspath(file_name))
        return _WHITESPACE.sub("-", name)

    def require_option(self, name: str) -> Any:
        value = self.options.get(name)
        if not value:
            raise TransportConfigError(f"Transport option `{name}` is required for this operation")
        return value

    @abstractmethod
    def upload_file(self, file_path: str, build: BuildLike) -> str:
        """Upload a file to the hosting and return its public URL."""

    @abstractmethod
    def push_updates_json(self, data: Any) -> None:
        """Save the updates manifest to the hosting."""

    @abstractmethod
    def fetch_builds_list(self) -> List[str]:
        """Return identifiers of the builds currently on the hosting."""

    @abstractmethod
    def remove_build(self, build: BuildLike) -> None:
        """Delete every file that belongs to a build."""

    @abstractmethod
    def get_file_url(self, local_file_path: str, build: BuildLike) -> str:
        """Return the public URL a local file is served under once uploaded."""
