"""Tests for trim-range arithmetic and output naming."""

from pathlib import Path

import pytest

from looptrim.models import TrimPlan
from looptrim.planner import InsufficientFramesError, output_name, plan_trim


class TestPlanTrim:
    def test_basic(self):
        plan = plan_trim(100, 10, 15)
        assert plan == TrimPlan(start_index=10, last_index=84, frames_to_keep=75)

    def test_no_trim_keeps_everything(self):
        plan = plan_trim(50, 0, 0)
        assert plan == TrimPlan(start_index=0, last_index=49, frames_to_keep=50)

    def test_single_frame_left(self):
        plan = plan_trim(10, 4, 5)
        assert plan.start_index == plan.last_index == 4
        assert plan.frames_to_keep == 1

    @pytest.mark.parametrize("total, start, end", [(100, 0, 0), (100, 99, 0), (7, 3, 2), (1000, 250, 500)])
    def test_frames_to_keep_matches_arithmetic(self, total, start, end):
        plan = plan_trim(total, start, end)
        assert plan.frames_to_keep == total - start - end
        assert plan.last_index - plan.start_index + 1 == plan.frames_to_keep

    def test_pure(self):
        assert plan_trim(100, 10, 15) == plan_trim(100, 10, 15)

    def test_too_many_frames_raises(self):
        with pytest.raises(InsufficientFramesError, match="leaves nothing"):
            plan_trim(20, 10, 15)

    def test_exactly_all_frames_raises(self):
        with pytest.raises(InsufficientFramesError):
            plan_trim(25, 10, 15)

    def test_insufficient_frames_is_value_error(self):
        with pytest.raises(ValueError):
            plan_trim(5, 5, 0)

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            plan_trim(100, -1, 0)


class TestOutputName:
    def test_basic(self):
        assert output_name(Path("clip.mp4"), 10, 15) == "clip_trim_s_10_e_15.mp4"

    def test_ignores_directory(self):
        assert output_name(Path("/videos/loop.mp4"), 0, 3) == "loop_trim_s_0_e_3.mp4"

    def test_preserves_extension_and_inner_dots(self):
        assert output_name(Path("take.2.MOV"), 1, 2) == "take.2_trim_s_1_e_2.MOV"

    def test_deterministic(self):
        assert output_name(Path("clip.mp4"), 10, 15) == output_name(Path("clip.mp4"), 10, 15)
