"""Shared test fixtures."""

from pathlib import Path

import pytest

from looptrim.models import VideoMeta


class FakeProbe:
    """Stands in for ffutil.probe; raises for paths listed in *errors*."""

    def __init__(self, meta: VideoMeta | None = None, errors: dict[str, Exception] | None = None):
        self.meta = meta or VideoMeta(frame_rate=30.0, total_frames=100)
        self.errors = errors or {}
        self.calls: list[Path] = []
        self.timeouts: list[float | None] = []

    def __call__(self, path: Path, timeout: float | None = None) -> VideoMeta:
        self.calls.append(path)
        self.timeouts.append(timeout)
        if path.name in self.errors:
            raise self.errors[path.name]
        return self.meta


class FakeTranscoder:
    """Stands in for ffutil.trim_frames; records calls, touches the output."""

    def __init__(self, errors: dict[str, Exception] | None = None):
        self.errors = errors or {}
        self.calls: list[tuple] = []

    def __call__(self, path, plan, output_path, timeout=None):
        self.calls.append((path, plan, output_path, timeout))
        if path.name in self.errors:
            raise self.errors[path.name]
        output_path.write_bytes(b"trimmed")
        return output_path


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def fake_transcoder() -> FakeTranscoder:
    return FakeTranscoder()


@pytest.fixture
def video_dir(tmp_path: Path) -> Path:
    """Three .mp4 files (created out of order), one .txt and a subdirectory."""
    for name in ("c.mp4", "a.mp4", "b.mp4", "notes.txt"):
        (tmp_path / name).write_bytes(b"fake video data")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "d.mp4").write_bytes(b"fake video data")
    return tmp_path
