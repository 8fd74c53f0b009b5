"""Unit tests for core entities."""
from __future__ import annotations

import numpy as np
import pytest

from backend.src.core.entities.extracted_frames import ExtractedFrames
from backend.src.core.entities.group_layout import GroupLayout
from backend.src.core.entities.minmax_table import MinMaxTable
from backend.src.core.entities.splat_frame import DecodedSplatFrame
from backend.src.core.entities.video import VideoInfo
from backend.src.core.exceptions import FrameIndexError, GroupNotFoundError
from backend.src.core.value_objects.frame_span import FrameSpan
from backend.src.core.value_objects.sampling_plan import SamplingPlan


class TestVideoInfo:
    def test_duration(self):
        info = VideoInfo(source="a.mp4", fps=25.0, total_frames=250, width=640, height=480)
        assert info.duration == pytest.approx(10.0)
        assert info.resolution_str == "640x480"

    def test_duration_formatted(self):
        info = VideoInfo(fps=30.0, total_frames=30 * 125)
        assert info.duration_formatted == "2:05"

    def test_unknown_fps_has_zero_duration(self):
        info = VideoInfo(fps=0.0, total_frames=100)
        assert info.duration == 0.0
        assert info.duration_formatted == "0:00"

    def test_to_dict(self, sample_info):
        data = sample_info.to_dict()
        assert data["source"] == "/tmp/clip.avi"
        assert data["total_frames"] == 90
        assert data["duration"] == pytest.approx(3.0)


class TestExtractedFrames:
    def test_append_and_len(self, sample_extracted):
        assert len(sample_extracted) == 3
        assert sample_extracted.source_indices == [0, 3, 6]
        assert sample_extracted.frame_shape == (24, 32)

    def test_append_requires_increasing_indices(self, sample_extracted):
        with pytest.raises(ValueError):
            sample_extracted.append(np.zeros((24, 32), dtype=np.uint8), 6, 0.2)

    def test_mismatched_lengths_rejected(self, sample_info):
        with pytest.raises(ValueError):
            ExtractedFrames(
                info=sample_info,
                plan=SamplingPlan(native_fps=30.0, target_fps=10),
                images=[np.zeros((2, 2), dtype=np.uint8)],
                source_indices=[],
                timestamps=[],
            )

    def test_empty_frames(self, sample_info):
        frames = ExtractedFrames(info=sample_info, plan=SamplingPlan(native_fps=30.0, target_fps=10))
        assert len(frames) == 0
        assert frames.frame_shape is None
        assert frames.summary()["frame_shape"] is None

    def test_summary(self, sample_extracted):
        summary = sample_extracted.summary()
        assert summary["frame_count"] == 3
        assert summary["frame_shape"] == [24, 32]
        assert summary["native_fps"] == 30.0
        assert summary["target_fps"] == 10
        assert summary["timestamps"] == [0.0, 0.1, 0.2]
        assert summary["truncated"] is False
        assert summary["color_mode"] == "bgr"


class TestGroupLayout:
    @pytest.fixture
    def layout(self):
        return GroupLayout(groups={1: FrameSpan(3, 5), 0: FrameSpan(0, 2)})

    def test_groups_sorted(self, layout):
        assert layout.group_indices == [0, 1]
        assert len(layout) == 2

    def test_total_frames(self, layout):
        assert layout.total_frames == 6
        assert GroupLayout().total_frames == 0

    def test_group_for_frame(self, layout):
        assert layout.group_for_frame(0) == 0
        assert layout.group_for_frame(4) == 1

    def test_group_for_frame_out_of_range(self, layout):
        with pytest.raises(FrameIndexError):
            layout.group_for_frame(6)

    def test_span_for_unknown_group(self, layout):
        with pytest.raises(GroupNotFoundError):
            layout.span_for(7)

    def test_to_dict(self, layout):
        data = layout.to_dict()
        assert data["total_frames"] == 6
        assert data["groups"][0] == {"group_index": 0, "start_frame": 0, "end_frame": 2}


class TestMinMaxTable:
    def test_lookup(self):
        table = MinMaxTable(values={2: [0.0, 1.0], 0: [0.0, 2.0]})
        assert 2 in table
        assert 1 not in table
        assert table.for_frame(0) == [0.0, 2.0]
        assert table.frame_indices == [0, 2]

    def test_missing_frame_raises(self):
        with pytest.raises(FrameIndexError):
            MinMaxTable().for_frame(0)


class TestDecodedSplatFrame:
    def test_counts_and_stack(self):
        planes = [np.full(6, float(i), dtype=np.float32) for i in range(3)]
        frame = DecodedSplatFrame("coser", 0, 4, planes=planes, shape=(2, 3))
        assert frame.plane_count == 3
        assert frame.point_count == 6
        stacked = frame.stacked()
        assert stacked.shape == (3, 2, 3)
        assert stacked.dtype == np.float32
        assert stacked[2, 1, 2] == 2.0

    def test_empty_frame(self):
        frame = DecodedSplatFrame("coser", 0, 0)
        assert frame.point_count == 0
        assert frame.stacked().shape == (0, 0, 0)

    def test_summary(self):
        plane = np.array([[1.0, 3.0]], dtype=np.float32)
        summary = DecodedSplatFrame("boxing", 1, 5, planes=[plane], shape=(1, 2)).summary()
        assert summary["dataset"] == "boxing"
        assert summary["shape"] == [1, 2]
        assert summary["planes"][0] == {"index": 0, "min": 1.0, "max": 3.0, "mean": 2.0}
