"""Pydantic models shared by the transport, services and API."""

from .schemas import Build, BuildList, PublishedBuild, PublishJob, PublishRequest, PublishResult  # noqa: F401
