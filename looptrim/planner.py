"""Frame arithmetic and output naming. No I/O."""

from pathlib import Path

from looptrim.models import TrimPlan


class InsufficientFramesError(ValueError):
    """Raised when the trim counts consume the whole video."""
    pass


def plan_trim(total_frames: int, frames_from_start: int, frames_from_end: int) -> TrimPlan:
    """Compute the retained frame range for a video of *total_frames* frames.

    The range is inclusive and zero-based: frames ``start_index`` through
    ``last_index`` survive, everything before and after is dropped.
    """
    if frames_from_start < 0 or frames_from_end < 0:
        raise ValueError("frame counts must be >= 0")

    frames_to_keep = total_frames - frames_from_start - frames_from_end
    if frames_to_keep <= 0:
        raise InsufficientFramesError(
            f"trimming {frames_from_start} + {frames_from_end} frames leaves "
            f"nothing of a {total_frames}-frame video"
        )

    return TrimPlan(
        start_index=frames_from_start,
        last_index=total_frames - frames_from_end - 1,
        frames_to_keep=frames_to_keep,
    )


def output_name(input_path: Path, frames_from_start: int, frames_from_end: int) -> str:
    """``clip.mp4`` trimmed by 10/15 becomes ``clip_trim_s_10_e_15.mp4``."""
    return f"{input_path.stem}_trim_s_{frames_from_start}_e_{frames_from_end}{input_path.suffix}"
