from __future__ import annotations

import asyncio
from datetime import date

import pytest

from labelist.adapters.http_resilience import FixedDelayLimiter
from labelist.domain.errors import TrackFetchError
from labelist.domain.label_pipeline import TrackCollector
from labelist.domain.model import Release, Track, TrackListing
from tests.support.gateway import FakeGateway, RecordingSleep, make_listings, make_release


def test_collect_stamps_tracks_with_release_metadata() -> None:
    first = make_release("a", "2019-06-15", name="First")
    second = make_release("b", "2020-01-01", name="Second")
    gateway = FakeGateway(
        releases=[first, second],
        tracks={"a": make_listings("a", 1), "b": make_listings("b", 2)},
    )

    tracks = asyncio.run(TrackCollector(gateway).collect([first, second], access_token="token"))

    assert tracks == [
        Track(
            uri="spotify:track:at1",
            track_number=1,
            release_id="a",
            release_name="First",
            release_date=date(2019, 6, 15),
        ),
        Track(
            uri="spotify:track:bt1",
            track_number=1,
            release_id="b",
            release_name="Second",
            release_date=date(2020, 1, 1),
        ),
        Track(
            uri="spotify:track:bt2",
            track_number=2,
            release_id="b",
            release_name="Second",
            release_date=date(2020, 1, 1),
        ),
    ]
    assert [call["limit"] for call in gateway.calls_to("release_tracks")] == [50, 50]


def test_collect_pauses_after_each_release(recording_sleep: RecordingSleep) -> None:
    releases = [make_release("a"), make_release("b"), make_release("c")]
    gateway = FakeGateway(releases=releases, tracks={"a": make_listings("a", 2)})
    collector = TrackCollector(gateway, limiter=FixedDelayLimiter(0.2, sleep=recording_sleep))

    tracks = asyncio.run(collector.collect(releases, access_token="token"))

    assert len(tracks) == 2
    assert recording_sleep.delays == [0.2, 0.2, 0.2]


def test_collect_failure_discards_everything() -> None:
    releases = [make_release("a"), make_release("b"), make_release("c")]
    gateway = FakeGateway(
        releases=releases,
        tracks={key: make_listings(key, 3) for key in ("a", "b", "c")},
        failures={"release_tracks": {2}},
    )

    with pytest.raises(TrackFetchError) as excinfo:
        asyncio.run(TrackCollector(gateway).collect(releases, access_token="token"))

    assert excinfo.value.status == 500
    assert "b" in str(excinfo.value)
    # the third release is never requested
    assert len(gateway.calls_to("release_tracks")) == 2


def test_iter_collect_yields_per_release_before_failing() -> None:
    releases = [make_release("a"), make_release("b")]
    gateway = FakeGateway(
        releases=releases,
        tracks={"a": make_listings("a", 1)},
        failures={"release_tracks": {2}},
    )
    seen: list[str] = []

    async def consume() -> None:
        async for release, _tracks in TrackCollector(gateway).iter_collect(
            releases, access_token="token"
        ):
            seen.append(release.id)

    with pytest.raises(TrackFetchError):
        asyncio.run(consume())

    assert seen == ["a"]


def test_collect_skips_unorderable_data() -> None:
    undated = make_release("undated", None)
    dated = make_release("dated", "2021-03-04")
    gateway = FakeGateway(
        releases=[undated, dated],
        tracks={
            "undated": make_listings("undated", 2),
            "dated": [
                TrackListing(uri="spotify:track:zero", track_number=0),
                TrackListing(uri="spotify:track:unnumbered", track_number=None),
                TrackListing(uri="spotify:track:one", track_number=1),
            ],
        },
    )

    tracks = asyncio.run(TrackCollector(gateway).collect([undated, dated], access_token="token"))

    assert [track.uri for track in tracks] == ["spotify:track:one"]


def test_track_from_listing_requires_release_date() -> None:
    release = Release(id="x", name="X", release_date=None)

    with pytest.raises(ValueError, match="no usable release date"):
        Track.from_listing(TrackListing(uri="spotify:track:x", track_number=1), release)


def test_track_from_listing_requires_track_number() -> None:
    release = make_release("x")

    with pytest.raises(ValueError, match="no usable track number"):
        Track.from_listing(TrackListing(uri="spotify:track:x", track_number=None), release)
