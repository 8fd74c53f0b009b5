"""GroupLayout entity mapping stream groups to the global frames they hold."""

from __future__ import annotations

from dataclasses import dataclass, field

from backend.src.core.exceptions import FrameIndexError, GroupNotFoundError
from backend.src.core.value_objects.frame_span import FrameSpan


@dataclass
class GroupLayout:
    """Ordered groups of a dataset, each owning a contiguous frame span."""

    groups: dict[int, FrameSpan] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.groups = dict(sorted(self.groups.items()))

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def group_indices(self) -> list[int]:
        return list(self.groups)

    @property
    def total_frames(self) -> int:
        if not self.groups:
            return 0
        return max(span.end_frame for span in self.groups.values()) + 1

    def span_for(self, group_index: int) -> FrameSpan:
        try:
            return self.groups[group_index]
        except KeyError:
            raise GroupNotFoundError(group_index) from None

    def group_for_frame(self, frame_index: int) -> int:
        for group_index, span in self.groups.items():
            if span.contains(frame_index):
                return group_index
        raise FrameIndexError(frame_index)

    def to_dict(self) -> dict:
        return {
            "total_frames": self.total_frames,
            "groups": [
                {"group_index": g, "start_frame": s.start_frame, "end_frame": s.end_frame}
                for g, s in self.groups.items()
            ],
        }
