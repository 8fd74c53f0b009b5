"""JSON file implementations of the splat metadata repository ports.

Two files accompany every dataset:

* the min/max table, ``{"viewers": {"<frame>": {"num": int, "info": [...]}}}``
* the group layout, ``{"<group>": {"frame_index": [start, end]}, ...}``
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from backend.src.core.entities.group_layout import GroupLayout
from backend.src.core.entities.minmax_table import MinMaxTable
from backend.src.core.exceptions import MetadataError
from backend.src.core.services.minmax_selector import extract_needed_values
from backend.src.core.value_objects.frame_span import FrameSpan

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _read_json(path: str, mtime: float) -> object:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load(path: str | Path) -> object:
    target = Path(path)
    if not target.is_file():
        raise MetadataError(f"Metadata file not found: {target}")
    try:
        return _read_json(str(target.resolve()), target.stat().st_mtime)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"Invalid JSON in {target}: {exc}") from exc


class JsonMinMaxRepository:
    """Implements :class:`MinMaxRepositoryPort` over viewer JSON files."""

    def load_range(self, path: str, start_frame: int, end_frame: int) -> MinMaxTable:
        """Return the needed values for frames ``start_frame..end_frame``.

        Frames without a viewer record are logged and left out.
        """
        data = _load(path)
        viewers = data.get("viewers") if isinstance(data, dict) else None
        if not isinstance(viewers, dict):
            raise MetadataError(f"{path} has no 'viewers' object")

        values: dict[int, list[float]] = {}
        for index in range(start_frame, end_frame + 1):
            viewer = viewers.get(str(index))
            if viewer is None:
                logger.warning("No viewer found for index %d", index)
                continue
            info = viewer.get("info") if isinstance(viewer, dict) else None
            if not isinstance(info, list):
                raise MetadataError(f"Viewer {index} in {path} has no 'info' list")
            values[index] = extract_needed_values(info)

        logger.debug("Loaded min/max for %d frames from %s", len(values), path)
        return MinMaxTable(values=values)


class JsonGroupLayoutRepository:
    """Implements :class:`GroupLayoutRepositoryPort` over group-info JSON files."""

    def load(self, path: str) -> GroupLayout:
        data = _load(path)
        if not isinstance(data, dict) or not data:
            raise MetadataError(f"{path} is empty or not a JSON object")

        groups: dict[int, FrameSpan] = {}
        for key, value in data.items():
            try:
                group_index = int(key)
                start, end = value["frame_index"]
                groups[group_index] = FrameSpan(int(start), int(end))
            except (ValueError, TypeError, KeyError) as exc:
                logger.warning("Skipping malformed group entry %r in %s: %s", key, path, exc)

        if not groups:
            raise MetadataError(f"No valid groups in {path}")

        layout = GroupLayout(groups=groups)
        logger.info("Loaded %d groups (%d frames) from %s", len(layout), layout.total_frames, path)
        return layout
