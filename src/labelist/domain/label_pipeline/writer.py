"""Create the playlist and append tracks in ordered batches."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from labelist.domain.errors import PlaylistAppendError, PlaylistCreateError, UpstreamError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator, Sequence

    from labelist.domain.model import Playlist, Session
    from labelist.domain.ports import CallLimiter, SpotifyGateway

log = getLogger(__name__)

T = TypeVar("T")

PLAYLIST_BATCH_SIZE = 100


def playlist_name(label: str) -> str:
    return f"Label Playlist: {label} (Chronological)"


def playlist_description(label: str) -> str:
    return f'A chronological playlist of songs from albums tagged with "{label}".'


def batched(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Split ``items`` into consecutive chunks of at most ``size``."""

    if size < 1:
        raise ValueError("Batch size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


@dataclass(frozen=True, slots=True)
class BatchResult:
    index: int
    count: int
    size: int
    appended: int


@dataclass(slots=True)
class PlaylistWriter:
    gateway: SpotifyGateway
    limiter: CallLimiter = field(default_factory=nullcontext)
    batch_size: int = PLAYLIST_BATCH_SIZE

    async def create(self, session: Session, label: str) -> Playlist:
        try:
            playlist = await self.gateway.create_playlist(
                session.access_token,
                user_id=session.user_id,
                name=playlist_name(label),
                description=playlist_description(label),
                public=False,
            )
        except UpstreamError as exc:
            raise PlaylistCreateError.from_upstream("Could not create the playlist", exc) from exc
        log.info(f'Created playlist "{playlist.name}" with ID: {playlist.id}')
        log.info(f"Playlist URL: {playlist.external_url}")
        return playlist

    async def iter_append(
        self,
        session: Session,
        playlist: Playlist,
        uris: Sequence[str],
    ) -> AsyncIterator[BatchResult]:
        """Append ``uris`` one batch at a time, yielding after each batch.

        Batches run strictly in order. A failed batch raises
        ``PlaylistAppendError``; batches already appended stay on the playlist.
        """

        batches = list(batched(uris, self.batch_size))
        appended = 0
        for index, batch in enumerate(batches, start=1):
            try:
                async with self.limiter:
                    await self.gateway.add_tracks(session.access_token, playlist.id, batch)
            except UpstreamError as exc:
                raise PlaylistAppendError(
                    f"Could not add batch {index} of {len(batches)} to playlist {playlist.id} "
                    f"({appended} tracks already added): {exc}",
                    status=exc.status,
                    payload=exc.payload,
                    appended=appended,
                ) from exc
            appended += len(batch)
            log.info(f"Added batch {index} of {len(batches)} of tracks to playlist.")
            yield BatchResult(index=index, count=len(batches), size=len(batch), appended=appended)

    async def append(self, session: Session, playlist: Playlist, uris: Sequence[str]) -> int:
        appended = 0
        async for result in self.iter_append(session, playlist, uris):
            appended = result.appended
        return appended
