"""Ports consumed by the label pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from labelist.domain.model import Playlist, ReleasePage, TrackListing, UserProfile


class CallLimiter(Protocol):
    """Async context manager wrapped around one outbound call.

    ``aiolimiter.AsyncLimiter`` (token bucket) and
    ``labelist.adapters.http_resilience.FixedDelayLimiter`` both satisfy it, so
    either can pace a pipeline stage.
    """

    async def __aenter__(self) -> object: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None: ...


@runtime_checkable
class SpotifyGateway(Protocol):
    """Calls against the streaming platform used by one pipeline run.

    Implementations raise ``labelist.domain.errors.UpstreamError`` for any
    non-success response, transport failure or malformed payload.
    """

    async def exchange_code(self, code: str) -> str: ...

    async def current_user(self, access_token: str) -> UserProfile: ...

    async def search_releases(
        self,
        access_token: str,
        *,
        query: str,
        limit: int,
        offset: int,
    ) -> ReleasePage: ...

    async def release_tracks(
        self,
        access_token: str,
        release_id: str,
        *,
        limit: int,
    ) -> list[TrackListing]: ...

    async def create_playlist(
        self,
        access_token: str,
        *,
        user_id: str,
        name: str,
        description: str,
        public: bool,
    ) -> Playlist: ...

    async def add_tracks(
        self,
        access_token: str,
        playlist_id: str,
        uris: Sequence[str],
    ) -> None: ...


__all__ = ["CallLimiter", "SpotifyGateway"]
