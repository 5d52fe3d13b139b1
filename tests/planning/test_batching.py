from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from util.media import HD, FakeProber, make_chapter, make_probe, write_clips
from gopro_uploader.infra.exceptions import ProbeError
from gopro_uploader.planning.batching import partition_chapters, plan_directory, plan_videos


def test_partition_single_batch() -> None:
    chapters = [make_chapter(f"{i}.mp4", minute=i) for i in range(3)]

    assert partition_chapters(chapters) == [chapters]


def test_partition_splits_on_incompatible_neighbour() -> None:
    a = make_chapter("a.mp4", minute=0)
    b = make_chapter("b.mp4", minute=1, size=HD)
    c = make_chapter("c.mp4", minute=2, size=HD)
    d = make_chapter("d.mp4", minute=3)

    assert partition_chapters([a, b, c, d]) == [[a], [b, c], [d]]


def test_partition_empty() -> None:
    assert partition_chapters([]) == []


def test_partition_is_idempotent() -> None:
    chapters = [
        make_chapter("a.mp4", minute=0),
        make_chapter("b.mp4", minute=1, size=HD),
        make_chapter("c.mp4", minute=2, size=HD),
        make_chapter("d.mp4", minute=3),
    ]

    for batch in partition_chapters(chapters):
        assert partition_chapters(batch) == [batch]


def test_plan_videos_single_batch_keeps_title() -> None:
    chapters = [make_chapter("a.mp4"), make_chapter("b.mp4", minute=1)]

    plans = plan_videos("/trip/day", chapters, "[Trip] day")

    assert len(plans) == 1
    assert plans[0].title == "[Trip] day"
    assert plans[0].path == Path("/trip/day")
    assert plans[0].chapters == tuple(chapters)
    assert plans[0].total_duration == timedelta(minutes=2)
    assert plans[0].create_time == chapters[0].create_time


@pytest.mark.parametrize("k", [2, 3])
def test_plan_videos_numbers_every_part_from_one(k: int) -> None:
    sizes = [(1920, 1080, "h264"), HD, (3840, 2160, "hevc")]
    chapters = [make_chapter(f"{i}.mp4", minute=i, size=sizes[i]) for i in range(k)]

    plans = plan_videos("/trip/day", chapters, "base")

    assert [p.title for p in plans] == [f"base pt {i}" for i in range(1, k + 1)]
    assert [p.chapters for p in plans] == [(c,) for c in chapters]


def test_plan_videos_without_chapters() -> None:
    assert plan_videos("/trip/day", [], "base") == []


def test_plan_directory_combines_extraction_and_titles(tmp_path: Path, prober: FakeProber) -> None:
    day = write_clips(
        tmp_path / "Day 1",
        prober,
        {"GH010001.MP4": make_probe(minute=0), "GH020001.MP4": make_probe(minute=9)},
    )

    plans = plan_directory(day, tmp_path, "Trip", prober)

    assert [p.title for p in plans] == ["[Trip] Day 1"]
    assert [c.file_name for c in plans[0].chapters] == ["GH010001.MP4", "GH020001.MP4"]


def test_plan_directory_empty_is_not_an_error(tmp_path: Path, prober: FakeProber) -> None:
    assert plan_directory(tmp_path, tmp_path, "Trip", prober) == []


def test_plan_directory_propagates_probe_errors(tmp_path: Path, prober: FakeProber) -> None:
    (tmp_path / "corrupt.mp4").write_bytes(b"")

    with pytest.raises(ProbeError):
        plan_directory(tmp_path, tmp_path, "Trip", prober)
