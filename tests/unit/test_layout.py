"""Unit tests for the day layout engine."""

from __future__ import annotations

import pytest

from itinerary_engine.domain.layout import layout_day, overlap_clusters, total_rows
from trip_builders import item


def test_total_rows():
    assert total_rows() == 96
    assert total_rows(30) == 48


def test_blocks_map_start_and_duration_to_rows():
    blocks = layout_day([item("09:00", "10:30", id="a")])
    assert len(blocks) == 1
    block = blocks[0]
    assert (block.row_start, block.row_span, block.column, block.total_columns) == (37, 6, 0, 1)


def test_transitive_overlaps_share_one_cluster():
    a = item("09:00", "10:00", id="a")
    b = item("09:45", "11:00", id="b")
    c = item("10:30", "11:30", id="c")
    d = item("14:00", "15:00", id="d")
    clusters = overlap_clusters([d, c, b, a])
    assert [[block.item_id for block in cluster] for cluster in clusters] == [["a", "b", "c"], ["d"]]
    first = clusters[0]
    assert [block.column for block in first] == [0, 1, 2]
    assert {block.total_columns for block in first} == {3}
    assert clusters[1][0].total_columns == 1


def test_touching_items_are_not_clustered():
    blocks = layout_day([item("09:00", "10:00", id="a"), item("10:00", "11:00", id="b")])
    assert [block.total_columns for block in blocks] == [1, 1]


@pytest.mark.parametrize(
    "ranges",
    [
        [],
        [("08:00", "09:00")],
        [("08:00", "12:00"), ("09:00", "09:30"), ("11:00", "13:00"), ("15:00", "16:00"), ("15:30", "16:30")],
        [("10:00", "10:10"), ("10:05", "10:20"), ("23:30", "23:59")],
    ],
)
def test_cluster_sizes_are_consistent(ranges):
    rows = [item(start, end) for start, end in ranges]
    clusters = overlap_clusters(rows)
    assert sum(len(cluster) for cluster in clusters) == len(rows)
    for cluster in clusters:
        assert all(block.total_columns == len(cluster) for block in cluster)
        assert sorted(block.column for block in cluster) == list(range(len(cluster)))


def test_late_item_is_clamped_to_grid():
    block = layout_day([item("23:30", "01:30")])[0]
    assert block.row_end - 1 <= total_rows()
    assert block.row_start == 95


def test_invalid_slot_size():
    with pytest.raises(ValueError):
        layout_day([item("09:00", "10:00")], slot_minutes=7)
