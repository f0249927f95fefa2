import json
from pathlib import Path

import pytest

from publisher.models import Build
from publisher.services.publish_manager import PublishManager
from publisher.transport import LocalPublishTransport


@pytest.fixture()
def manager(transport: LocalPublishTransport) -> PublishManager:
    return PublishManager(transport)


def _manifest(transport: LocalPublishTransport) -> dict:
    return json.loads((transport.out_path / "updates.json").read_text(encoding="utf-8"))


def test_publish_uploads_files_and_records_manifest(
    manager: PublishManager, transport: LocalPublishTransport, artifact: Path
) -> None:
    notes = artifact.parent / "RELEASE NOTES.txt"
    notes.write_text("fixed things")
    build = Build(version="1.0.0", platform="win32", arch="x64")

    result = manager.publish(build, [str(artifact), str(notes)])

    assert result.build_id == "win32-x64-v1.0.0"
    assert result.urls == [
        "https://cdn.example.com/app/win32-x64-v1.0.0/app.exe",
        "https://cdn.example.com/app/win32-x64-v1.0.0/RELEASE-NOTES.txt",
    ]
    entry = _manifest(transport)["win32-x64-v1.0.0"]
    assert entry["version"] == "1.0.0"
    assert entry["files"] == result.urls
    assert entry["published_at"]


def test_publish_requires_files(manager: PublishManager) -> None:
    with pytest.raises(ValueError):
        manager.publish(Build(version="1.0.0"), [])


def test_publish_merges_with_existing_manifest(
    manager: PublishManager, transport: LocalPublishTransport, artifact: Path
) -> None:
    manager.publish(Build(version="1.0.0"), [str(artifact)])
    manager.publish(Build(version="1.0.1"), [str(artifact)])

    assert set(_manifest(transport)) == {"1.0.0", "1.0.1"}


def test_remove_drops_directory_and_manifest_entry(
    manager: PublishManager, transport: LocalPublishTransport, artifact: Path
) -> None:
    manager.publish(Build(version="1.0.0"), [str(artifact)])
    manager.publish(Build(version="1.0.1"), [str(artifact)])

    manager.remove(Build(version="1.0.0"))
    manager.remove("1.0.0")

    assert transport.fetch_builds_list() == ["1.0.1"]
    assert set(_manifest(transport)) == {"1.0.1"}


def test_prune_keeps_newest_builds(manager: PublishManager, transport: LocalPublishTransport, artifact: Path) -> None:
    for version in ("1.0.0", "1.0.1", "1.0.2"):
        manager.publish(Build(version=version), [str(artifact)])
    # a build directory the manifest knows nothing about counts as oldest
    (transport.out_path / "0.9.0").mkdir()

    removed = manager.prune(keep=2)

    assert sorted(removed) == ["0.9.0", "1.0.0"]
    assert sorted(transport.fetch_builds_list()) == ["1.0.1", "1.0.2"]
    assert set(_manifest(transport)) == {"1.0.1", "1.0.2"}


def test_prune_rejects_negative_keep(manager: PublishManager) -> None:
    with pytest.raises(ValueError):
        manager.prune(keep=-1)


def test_prune_orders_by_timestamp_not_text(manager: PublishManager, transport: LocalPublishTransport) -> None:
    # whole-second timestamps are serialized without a fractional part
    (transport.out_path / "1.0.0").mkdir(parents=True)
    (transport.out_path / "1.0.1").mkdir()
    transport.push_updates_json(
        {
            "1.0.0": {"published_at": "2024-01-01T00:00:00.500000Z"},
            "1.0.1": {"published_at": "2024-01-01T00:00:00Z"},
        }
    )

    removed = manager.prune(keep=1)

    assert removed == ["1.0.1"]
    assert transport.fetch_builds_list() == ["1.0.0"]
