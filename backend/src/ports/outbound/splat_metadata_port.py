"""Ports for the per-dataset metadata files (min/max ranges, group layout)."""
from __future__ import annotations
from typing import Protocol, runtime_checkable

from backend.src.core.entities.group_layout import GroupLayout
from backend.src.core.entities.minmax_table import MinMaxTable


@runtime_checkable
class MinMaxRepositoryPort(Protocol):
    def load_range(self, path: str, start_frame: int, end_frame: int) -> MinMaxTable: ...


@runtime_checkable
class GroupLayoutRepositoryPort(Protocol):
    def load(self, path: str) -> GroupLayout: ...
