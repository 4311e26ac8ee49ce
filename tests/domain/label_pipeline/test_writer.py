from __future__ import annotations

import asyncio

import pytest

from labelist.adapters.http_resilience import FixedDelayLimiter
from labelist.domain.errors import PlaylistAppendError, PlaylistCreateError
from labelist.domain.label_pipeline import BatchResult, PlaylistWriter, batched
from labelist.domain.model import Session
from tests.support.gateway import FakeGateway, RecordingSleep

SESSION = Session(access_token="token", user_id="user-1")


def _uris(count: int) -> list[str]:
    return [f"spotify:track:{index}" for index in range(count)]


@pytest.mark.parametrize(
    ("count", "sizes"),
    [(0, []), (1, [1]), (100, [100]), (101, [100, 1]), (250, [100, 100, 50])],
)
def test_batched_splits_into_ceil_n_over_size(count: int, sizes: list[int]) -> None:
    assert [len(batch) for batch in batched(_uris(count), 100)] == sizes


def test_batched_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="positive"):
        list(batched([1, 2], 0))


def test_create_makes_private_playlist_named_after_label(gateway: FakeGateway) -> None:
    playlist = asyncio.run(PlaylistWriter(gateway).create(SESSION, "Crosstown Rebels"))

    assert playlist == gateway.playlist
    assert gateway.created == [
        {
            "user_id": "user-1",
            "name": "Label Playlist: Crosstown Rebels (Chronological)",
            "description": (
                'A chronological playlist of songs from albums tagged with "Crosstown Rebels".'
            ),
            "public": False,
        }
    ]


def test_create_failure_raises_playlist_create_error(gateway: FakeGateway) -> None:
    gateway.failures = {"create_playlist": {1}}

    with pytest.raises(PlaylistCreateError) as excinfo:
        asyncio.run(PlaylistWriter(gateway).create(SESSION, "Label"))

    assert excinfo.value.status == 500


def test_append_issues_batches_in_order(
    gateway: FakeGateway, recording_sleep: RecordingSleep
) -> None:
    uris = _uris(250)
    writer = PlaylistWriter(gateway, limiter=FixedDelayLimiter(0.3, sleep=recording_sleep))
    results: list[BatchResult] = []

    async def consume() -> None:
        async for result in writer.iter_append(SESSION, gateway.playlist, uris):
            results.append(result)

    asyncio.run(consume())

    assert [len(batch) for batch in gateway.appended] == [100, 100, 50]
    assert [uri for batch in gateway.appended for uri in batch] == uris
    assert results == [
        BatchResult(index=1, count=3, size=100, appended=100),
        BatchResult(index=2, count=3, size=100, appended=200),
        BatchResult(index=3, count=3, size=50, appended=250),
    ]
    assert recording_sleep.delays == [0.3, 0.3, 0.3]


def test_append_failure_keeps_earlier_batches(gateway: FakeGateway) -> None:
    gateway.failures = {"add_tracks": {2}}
    writer = PlaylistWriter(gateway)

    with pytest.raises(PlaylistAppendError) as excinfo:
        asyncio.run(writer.append(SESSION, gateway.playlist, _uris(250)))

    assert excinfo.value.appended == 100
    assert excinfo.value.status == 500
    # the failed batch never landed and no third batch follows
    assert gateway.appended == [_uris(250)[:100]]
    assert len(gateway.calls_to("add_tracks")) == 2


def test_append_returns_number_of_tracks_added(gateway: FakeGateway) -> None:
    added = asyncio.run(PlaylistWriter(gateway).append(SESSION, gateway.playlist, _uris(3)))

    assert added == 3
