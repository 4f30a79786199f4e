"""Shared data types used across looptrim."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class VideoMeta:
    """Frame rate and frame count reported by ffprobe."""

    frame_rate: float
    total_frames: int


@dataclass(frozen=True)
class TrimPlan:
    """Inclusive band of frame indices to keep."""

    start_index: int
    last_index: int
    frames_to_keep: int


@dataclass(frozen=True)
class Success:
    input_path: Path
    output_path: Path
    meta: VideoMeta
    plan: TrimPlan

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    input_path: Path
    error: Exception

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return str(self.error)


BatchResult = Success | Failure


@dataclass
class BatchReport:
    """Outcome of a run over one file or a directory."""

    results: list[BatchResult] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    cancelled: bool = False

    @property
    def succeeded(self) -> list[Success]:
        return [r for r in self.results if isinstance(r, Success)]

    @property
    def failed(self) -> list[Failure]:
        return [r for r in self.results if isinstance(r, Failure)]
