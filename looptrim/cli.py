"""Thin CLI entry point — builds a TrimRequest and calls the engine."""

import argparse
import signal
import sys
from pathlib import Path

from loguru import logger

from looptrim import ffutil
from looptrim.engine import DEFAULT_EXTENSION, InvalidPathError, run_batch
from looptrim.request import TrimRequest, parse_frame_count

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _frame_count(text: str) -> int:
    try:
        return parse_frame_count(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="looptrim",
        description="Trim frames from the start and end of videos to make seamless loops.",
        epilog=(
            "examples:\n"
            "  looptrim source.mp4 10 15\n"
            "  looptrim /path/to/videos 10 15"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", type=Path, help="Input video file or directory of videos")
    parser.add_argument("start", type=_frame_count, help="Frames to trim from the start")
    parser.add_argument("end", type=_frame_count, help="Frames to trim from the end")
    parser.add_argument("--output-dir", "-o", type=Path, help="Write outputs here instead of next to the inputs")
    parser.add_argument("--extension", default=DEFAULT_EXTENSION, help="Video extension to pick up in directory mode")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds allowed per ffprobe/ffmpeg call")
    parser.add_argument("--strict", action="store_true", help="Exit non-zero if any file in a directory fails")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log ffmpeg command lines")
    return parser


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> | {message}",
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        ffutil.check_ffmpeg()
    except ffutil.MissingDependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    if not (args.input.is_file() or args.input.is_dir()):
        print(f"Error: Input '{args.input}' is not a valid file or directory", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    try:
        request = TrimRequest(
            input_path=args.input,
            frames_from_start=args.start,
            frames_from_end=args.end,
            output_dir=args.output_dir,
            timeout=args.timeout,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    if args.output_dir:
        try:
            args.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"Error: cannot use output directory {args.output_dir}: {e}", file=sys.stderr)
            sys.exit(EXIT_FAILURE)

    single_file = args.input.is_file()
    stop_requested = False

    def on_interrupt(signum, frame) -> None:
        nonlocal stop_requested
        stop_requested = True
        print("\nInterrupted; stopping after the current file.", file=sys.stderr)

    def on_event(stage: str, path: Path, detail) -> None:
        if stage == "probing":
            print("---")
            print(f"Processing video file: {path}")
        elif stage == "planning":
            print(f"  - Frame Rate: {detail.frame_rate:.3f} fps")
            print(f"  - Total Frames: {detail.total_frames}")
        elif stage == "transcoding":
            print(f"  - Keeping frames from index {detail.start_index} to {detail.last_index}")
            print(f"  - Total frames in output: {detail.frames_to_keep}")
            print("  Trimming video... This may take a moment.")

    previous = signal.signal(signal.SIGINT, on_interrupt)
    try:
        report = run_batch(
            request,
            extension=args.extension,
            should_stop=lambda: stop_requested,
            on_event=on_event,
        )
    except InvalidPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    finally:
        signal.signal(signal.SIGINT, previous)

    for r in report.results:
        if r.ok:
            print(f"  OK   {r.input_path.name} -> {r.output_path} "
                  f"({r.plan.frames_to_keep}/{r.meta.total_frames} frames)")
        else:
            print(f"  FAIL {r.input_path.name}: {r.reason}")

    print("---")
    if not single_file and not report.results and not report.cancelled:
        print(f"Error: no {args.extension} files found in {args.input}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    print(f"Done! {len(report.succeeded)} succeeded, {len(report.failed)} failed.")
    if report.cancelled:
        print(f"  Not processed: {len(report.skipped)}")
        sys.exit(EXIT_INTERRUPTED)
    if report.failed and (single_file or args.strict):
        sys.exit(EXIT_FAILURE)
    sys.exit(EXIT_OK)
