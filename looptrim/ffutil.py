"""FFmpeg/ffprobe subprocess helpers."""

import json
import shutil
import subprocess
from fractions import Fraction
from pathlib import Path

from loguru import logger

from looptrim.models import TrimPlan, VideoMeta


class MissingDependencyError(RuntimeError):
    pass


class ProbeError(RuntimeError):
    """Raised when ffprobe cannot report a frame rate and frame count."""
    pass


class TranscodeError(RuntimeError):
    """Raised when ffmpeg exits non-zero or times out."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def check_ffmpeg() -> None:
    """Raise MissingDependencyError if ffmpeg/ffprobe are not on PATH."""
    missing = [cmd for cmd in ("ffmpeg", "ffprobe") if shutil.which(cmd) is None]
    if missing:
        raise MissingDependencyError(
            f"{' and '.join(missing)} not found on PATH; install ffmpeg to use looptrim"
        )


def _tail(text: str, lines: int = 5) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


def parse_frame_rate(value: str) -> float:
    """Parse ffprobe's rational ``r_frame_rate`` (e.g. "30000/1001")."""
    try:
        rate = Fraction(value.strip())
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"unparseable frame rate {value!r}") from None
    if rate <= 0:
        raise ValueError(f"non-positive frame rate {value!r}")
    return float(rate)


def probe(input_path: Path, timeout: float | None = None) -> VideoMeta:
    """Read the first video stream's frame rate and decoded frame count.

    ``-count_frames`` decodes the whole stream, so this is as slow as a
    full read of the file.
    """
    cmd = [
        "ffprobe",
        "-v", "error",
        "-select_streams", "v:0",
        "-count_frames",
        "-show_entries", "stream=r_frame_rate,nb_read_frames",
        "-print_format", "json",
        str(input_path),
    ]
    logger.debug("Running: {}", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=True, timeout=timeout
        )
    except FileNotFoundError as e:
        raise ProbeError(f"ffprobe could not be started for {input_path}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ffprobe timed out after {timeout}s on {input_path}") from e
    except subprocess.CalledProcessError as e:
        raise ProbeError(
            f"ffprobe failed on {input_path} (rc={e.returncode}): {_tail(e.stderr or '')}"
        ) from e

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ProbeError(f"ffprobe returned malformed output for {input_path}") from e

    streams = data.get("streams") or []
    if not streams:
        raise ProbeError(f"No video stream found in {input_path}")
    stream = streams[0]

    try:
        frame_rate = parse_frame_rate(stream.get("r_frame_rate", ""))
    except ValueError as e:
        raise ProbeError(f"Could not determine frame rate for {input_path}: {e}") from e

    raw_frames = stream.get("nb_read_frames")
    try:
        total_frames = int(raw_frames)
    except (TypeError, ValueError):
        raise ProbeError(
            f"Could not determine total frames for {input_path} (got {raw_frames!r})"
        ) from None
    if total_frames <= 0:
        raise ProbeError(f"{input_path} has no decodable video frames")

    return VideoMeta(frame_rate=frame_rate, total_frames=total_frames)


def build_select_filter(plan: TrimPlan) -> str:
    """Video filter keeping the plan's inclusive frame range, starting at t=0."""
    return (
        f"select='between(n,{plan.start_index},{plan.last_index})',"
        "setpts=PTS-STARTPTS"
    )


def trim_frames(
    input_path: Path,
    plan: TrimPlan,
    output_path: Path,
    timeout: float | None = None,
) -> Path:
    """Write *output_path* holding only the planned frames, without audio.

    An existing output file is overwritten.
    """
    cmd = [
        "ffmpeg", "-y",
        "-i", str(input_path),
        "-vf", build_select_filter(plan),
        "-an",
        str(output_path),
    ]
    logger.debug("Running: {}", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise TranscodeError(f"ffmpeg could not be started for {input_path}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise TranscodeError(f"ffmpeg timed out after {timeout}s on {input_path}") from e

    if result.returncode != 0:
        raise TranscodeError(
            f"ffmpeg failed on {input_path} (rc={result.returncode}): {_tail(result.stderr or '')}",
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    return output_path
