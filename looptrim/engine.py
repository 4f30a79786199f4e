"""Orchestrator — runs the trim pipeline over one file or a directory."""

from pathlib import Path
from typing import Callable

from loguru import logger

from looptrim import ffutil
from looptrim.ffutil import ProbeError, TranscodeError
from looptrim.models import BatchReport, BatchResult, Failure, Success, TrimPlan, VideoMeta
from looptrim.planner import InsufficientFramesError, output_name, plan_trim
from looptrim.request import TrimRequest

ProbeFn = Callable[..., VideoMeta]
TranscodeFn = Callable[..., Path]
EventFn = Callable[[str, Path, object], None]

DEFAULT_EXTENSION = ".mp4"

# Per-file errors that become a Failure instead of aborting the batch.
FILE_ERRORS = (FileNotFoundError, ProbeError, InsufficientFramesError, TranscodeError)


class InvalidPathError(ValueError):
    """Raised when the input is neither a file nor a directory."""
    pass


def collect_inputs(input_path: Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Resolve *input_path* into the files to process, sorted by name.

    A file is returned as-is. For a directory only its immediate regular
    files with a matching extension are returned; subdirectories are not
    descended into.
    """
    if input_path.is_file():
        return [input_path]
    if not input_path.is_dir():
        raise InvalidPathError(f"Input '{input_path}' is not a valid file or directory")

    ext = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
    candidates: list[Path] = []
    for entry in sorted(input_path.iterdir(), key=lambda p: p.name):
        if entry.is_file() and entry.suffix.lower() == ext:
            candidates.append(entry)
        else:
            logger.debug("Skipping {}", entry)
    return candidates


def process_one(
    path: Path,
    request: TrimRequest,
    probe: ProbeFn | None = None,
    transcode: TranscodeFn | None = None,
    on_event: EventFn | None = None,
) -> BatchResult:
    """Probe, plan and trim a single file.

    Args:
        path: The video to trim.
        request: Trim counts, output directory and timeout.
        probe: Callable(path, timeout=...) returning VideoMeta;
            defaults to ffutil.probe.
        transcode: Callable(path, plan, output_path, timeout=...);
            defaults to ffutil.trim_frames.
        on_event: Optional callback(stage_name, path, detail); detail is
            the VideoMeta for "planning", the TrimPlan for "transcoding"
            and None otherwise.
    """

    probe = probe or ffutil.probe
    transcode = transcode or ffutil.trim_frames

    def _event(stage: str, detail: object = None) -> None:
        if on_event:
            on_event(stage, path, detail)

    try:
        if not path.is_file():
            raise FileNotFoundError(f"Input file '{path}' not found")

        _event("probing")
        meta = probe(path, timeout=request.timeout)
        logger.info(
            "{}: {:.3f} fps, {} frames", path.name, meta.frame_rate, meta.total_frames
        )

        _event("planning", meta)
        plan: TrimPlan = plan_trim(
            meta.total_frames, request.frames_from_start, request.frames_from_end
        )
        logger.info(
            "{}: keeping frames {}..{} ({} frames)",
            path.name, plan.start_index, plan.last_index, plan.frames_to_keep,
        )

        out_dir = request.output_dir or path.parent
        output_path = out_dir / output_name(
            path, request.frames_from_start, request.frames_from_end
        )

        _event("transcoding", plan)
        transcode(path, plan, output_path, timeout=request.timeout)
    except FILE_ERRORS as e:
        logger.error("{}: {}", path, e)
        _event("failed")
        return Failure(input_path=path, error=e)

    _event("succeeded")
    return Success(input_path=path, output_path=output_path, meta=meta, plan=plan)


def run_batch(
    request: TrimRequest,
    extension: str = DEFAULT_EXTENSION,
    probe: ProbeFn | None = None,
    transcode: TranscodeFn | None = None,
    should_stop: Callable[[], bool] | None = None,
    on_event: EventFn | None = None,
) -> BatchReport:
    """Trim every candidate under ``request.input_path`` one after another.

    A failing file is recorded and the loop moves on. *should_stop* is
    checked before each file is probed; once it returns True the remaining
    files are listed in ``BatchReport.skipped``.
    """
    candidates = collect_inputs(request.input_path, extension)
    report = BatchReport()

    for i, path in enumerate(candidates):
        if should_stop and should_stop():
            report.cancelled = True
            report.skipped = candidates[i:]
            logger.warning("Stopping; {} file(s) not processed", len(report.skipped))
            break
        report.results.append(
            process_one(path, request, probe=probe, transcode=transcode, on_event=on_event)
        )

    logger.info(
        "{} succeeded, {} failed", len(report.succeeded), len(report.failed)
    )
    return report

