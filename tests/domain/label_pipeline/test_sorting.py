from __future__ import annotations

from datetime import date

from labelist.domain.label_pipeline import sort_chronologically
from labelist.domain.model import Track


def _track(release_id: str, released: str, number: int, *, suffix: str = "") -> Track:
    return Track(
        uri=f"spotify:track:{release_id}t{number}{suffix}",
        track_number=number,
        release_id=release_id,
        release_name=release_id,
        release_date=date.fromisoformat(released),
    )


def _uris(tracks: list[Track]) -> list[str]:
    return [track.uri.removeprefix("spotify:track:") for track in tracks]


def test_sort_orders_by_release_date_then_track_number() -> None:
    tracks = [
        _track("2020", "2020-01-01", 2),
        _track("2020", "2020-01-01", 1),
        _track("2019", "2019-06-15", 1),
    ]

    assert _uris(sort_chronologically(tracks)) == ["2019t1", "2020t1", "2020t2"]


def test_sort_satisfies_adjacent_pair_ordering() -> None:
    tracks = [
        _track("c", "2001-05-01", 3),
        _track("a", "1999-01-01", 2),
        _track("b", "2001-05-01", 1),
        _track("a", "1999-01-01", 1),
        _track("d", "1998-12-31", 7),
        _track("c", "2001-05-01", 1),
        _track("e", "2010-10-10", 4),
    ]

    ordered = sort_chronologically(tracks)

    assert len(ordered) == len(tracks)
    for first, second in zip(ordered, ordered[1:], strict=False):
        assert first.release_date < second.release_date or (
            first.release_date == second.release_date
            and first.track_number <= second.track_number
        )


def test_sort_is_stable_for_equal_keys() -> None:
    tracks = [
        _track("x", "2000-01-01", 1, suffix="-first"),
        _track("y", "2000-01-01", 1, suffix="-second"),
        _track("z", "2000-01-01", 1, suffix="-third"),
    ]

    assert _uris(sort_chronologically(tracks)) == ["xt1-first", "yt1-second", "zt1-third"]


def test_same_day_releases_interleave_by_track_number() -> None:
    tracks = [
        _track("R1", "2020-01-01", 1),
        _track("R1", "2020-01-01", 2),
        _track("R1", "2020-01-01", 3),
        _track("R2", "2020-01-01", 1),
        _track("R2", "2020-01-01", 2),
    ]

    assert _uris(sort_chronologically(tracks)) == ["R1t1", "R2t1", "R1t2", "R2t2", "R1t3"]


def test_keep_releases_together_keeps_same_day_releases_contiguous() -> None:
    tracks = [
        _track("R1", "2020-01-01", 3),
        _track("R1", "2020-01-01", 1),
        _track("R1", "2020-01-01", 2),
        _track("R2", "2020-01-01", 2),
        _track("R2", "2020-01-01", 1),
        _track("R0", "2019-01-01", 1),
    ]

    ordered = sort_chronologically(tracks, keep_releases_together=True)

    assert _uris(ordered) == ["R0t1", "R1t1", "R1t2", "R1t3", "R2t1", "R2t2"]


def test_sort_does_not_mutate_input() -> None:
    tracks = [_track("b", "2020-01-01", 1), _track("a", "2019-01-01", 1)]
    snapshot = list(tracks)

    sort_chronologically(tracks)

    assert tracks == snapshot


def test_sort_of_nothing_is_empty() -> None:
    assert sort_chronologically([]) == []
