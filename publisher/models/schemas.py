from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

_RESERVED_SEGMENTS = {".", ".."}


class Build(BaseModel):
    version: str = Field(..., min_length=1, description="Release version of the build.")
    platform: Optional[str] = Field(None, description="Target platform, e.g. `win32` or `linux`.")
    arch: Optional[str] = Field(None, description="Target architecture, e.g. `x64`.")

    @field_validator("version", "platform", "arch")
    @classmethod
    def single_path_segment(cls, value: Optional[str]) -> Optional[str]:
        """Build ids name a directory directly under the output root."""
        if value is None:
            return value
        if value in _RESERVED_SEGMENTS or any(char in value for char in ("/", "\\", "\x00")):
            raise ValueError("must not contain path separators or be `.`/`..`")
        return value


class PublishRequest(Build):
    files: List[str] = Field(..., min_length=1, description="Paths of local artifact files to publish.")


class PublishedBuild(BaseModel):
    build_id: str
    version: str
    platform: Optional[str] = None
    arch: Optional[str] = None
    files: List[str] = Field(default_factory=list, description="Public URLs of the published artifacts.")
    published_at: datetime


class PublishResult(BaseModel):
    build_id: str
    urls: List[str] = Field(default_factory=list)


class PublishJob(BaseModel):
    job_id: str
    build_id: str


class BuildList(BaseModel):
    builds: List[str] = Field(default_factory=list)
