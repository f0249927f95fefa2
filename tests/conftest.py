from __future__ import annotations

from pathlib import Path

import pytest

from publisher.config import Settings
from publisher.transport import LocalPublishTransport


@pytest.fixture()
def config(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        out_path=tmp_path / "publish",
        remote_url="https://cdn.example.com/app/",
        api_token="secret",
    )


@pytest.fixture()
def transport(config: Settings) -> LocalPublishTransport:
    return LocalPublishTransport(config)


@pytest.fixture()
def artifact(tmp_path: Path) -> Path:
    """A small binary artifact outside the output root."""
    source = tmp_path / "build" / "app.exe"
    source.parent.mkdir()
    source.write_bytes(b"MZ\x90\x00binary-payload\x00\xff")
    return source
