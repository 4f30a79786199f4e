"""Trim request — the contract between the CLI and the engine."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TrimRequest:
    """What to trim and where the results go."""

    input_path: Path
    frames_from_start: int
    frames_from_end: int
    output_dir: Path | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        for name in ("frames_from_start", "frames_from_end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


def parse_frame_count(text: str) -> int:
    """Parse a command-line frame count, rejecting negatives and non-integers."""
    try:
        value = int(text.strip())
    except ValueError:
        raise ValueError(f"frame count must be a whole number, got {text!r}") from None
    if value < 0:
        raise ValueError(f"frame count must be >= 0, got {value}")
    return value
