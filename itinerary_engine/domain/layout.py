"""Day layout: overlap clusters and side-by-side columns for a time grid.

A day is quantized into fixed slots (15 minutes gives 96 rows). Items whose
slot ranges intersect, directly or through a shared neighbour, form one
cluster; each cluster member gets its own column so the renderer can split the
day's width evenly. This is connected components over intervals, not a minimum
colouring, so a cluster may use more columns than strictly necessary.
"""

from __future__ import annotations

import math
from typing import Iterable

from pydantic import BaseModel

from itinerary_engine.domain.constants import DEFAULT_LAYOUT_DURATION_MINUTES, DEFAULT_SLOT_MINUTES, MINUTES_PER_DAY
from itinerary_engine.domain.models import Item


class LayoutBlock(BaseModel):
    item_id: str
    row_start: int
    row_span: int
    column: int = 0
    total_columns: int = 1

    @property
    def row_end(self) -> int:
        return self.row_start + self.row_span


def total_rows(slot_minutes: int = DEFAULT_SLOT_MINUTES) -> int:
    return MINUTES_PER_DAY // slot_minutes


def _slot_range(item: Item, slot_minutes: int) -> tuple[int, int]:
    rows = total_rows(slot_minutes)
    duration = item.duration or DEFAULT_LAYOUT_DURATION_MINUTES
    row_start = min(item.start_minutes // slot_minutes + 1, rows)
    row_span = max(1, math.ceil(duration / slot_minutes))
    row_span = min(row_span, rows - row_start + 1)
    return row_start, row_span


def overlap_clusters(items: Iterable[Item], slot_minutes: int = DEFAULT_SLOT_MINUTES) -> list[list[LayoutBlock]]:
    if slot_minutes <= 0 or MINUTES_PER_DAY % slot_minutes:
        raise ValueError(f"slot_minutes must divide a day evenly, got {slot_minutes}")

    blocks: list[LayoutBlock] = []
    for item in items:
        row_start, row_span = _slot_range(item, slot_minutes)
        blocks.append(LayoutBlock(item_id=item.id, row_start=row_start, row_span=row_span))
    # Stable sort keeps input order for items that start in the same slot.
    blocks.sort(key=lambda block: block.row_start)

    clusters: list[list[LayoutBlock]] = []
    cluster_end = 0
    for block in blocks:
        if clusters and block.row_start < cluster_end:
            clusters[-1].append(block)
            cluster_end = max(cluster_end, block.row_end)
        else:
            clusters.append([block])
            cluster_end = block.row_end

    for cluster in clusters:
        for column, block in enumerate(cluster):
            block.column = column
            block.total_columns = len(cluster)
    return clusters


def layout_day(items: Iterable[Item], slot_minutes: int = DEFAULT_SLOT_MINUTES) -> list[LayoutBlock]:
    return [block for cluster in overlap_clusters(items, slot_minutes) for block in cluster]


__all__ = ["LayoutBlock", "layout_day", "overlap_clusters", "total_rows"]
