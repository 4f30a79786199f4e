#!/usr/bin/env python3
"""Generate a synthetic clip with a known frame count for looptrim testing.

Produces a 320x240 testsrc video (frame counter burned in by the
source) of FRAMES frames at FPS, plus a sine audio track so the audio drop
can be checked:

    generate_test_video.py out.mp4 [FRAMES] [FPS]
"""

import subprocess
import sys
from pathlib import Path


def generate_test_video(output: Path, frames: int = 60, fps: int = 30) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", f"testsrc=s=320x240:r={fps}",
        "-f", "lavfi", "-i", f"sine=f=440:d={frames / fps}",
        "-frames:v", str(frames),
        "-c:v", "libx264",
        "-pix_fmt", "yuv420p",
        "-c:a", "aac",
        str(output),
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic.mp4")
    frames = int(sys.argv[2]) if len(sys.argv) > 2 else 60
    fps = int(sys.argv[3]) if len(sys.argv) > 3 else 30
    generate_test_video(out, frames, fps)
