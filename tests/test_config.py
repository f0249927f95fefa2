from pathlib import Path

import pytest

from publisher.config import DEFAULT_OUT_PATH, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PUBLISH_OUT_PATH", "PUBLISH_REMOTE_URL", "PUBLISH_JOB_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = Settings(_env_file=None)
    assert config.out_path == DEFAULT_OUT_PATH
    assert config.remote_url is None
    assert config.job_timeout_seconds == 600


def test_empty_out_path_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUBLISH_OUT_PATH", "")
    assert Settings(_env_file=None).out_path == Path("dist/publish")


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PUBLISH_OUT_PATH", str(tmp_path / "out"))
    monkeypatch.setenv("PUBLISH_REMOTE_URL", "https://cdn.example.com/app/")
    monkeypatch.setenv("PUBLISH_JOB_TIMEOUT_SECONDS", "0")

    config = Settings(_env_file=None)

    assert config.out_path == tmp_path / "out"
    # kept verbatim so only one trailing slash is stripped when building URLs
    assert config.remote_url == "https://cdn.example.com/app/"
    assert config.job_timeout_seconds is None
