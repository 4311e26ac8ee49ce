"""Fetch the track listing of every discovered release."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.domain.errors import TrackFetchError, UpstreamError
from labelist.domain.model import Track

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from labelist.domain.model import Release, TrackListing
    from labelist.domain.ports import CallLimiter, SpotifyGateway

log = getLogger(__name__)

RELEASE_TRACKS_LIMIT = 50


@dataclass(slots=True)
class TrackCollector:
    """Fetch up to ``tracks_limit`` tracks per release, one release at a time.

    Releases longer than ``tracks_limit`` are truncated: there is no pagination
    within a release. Releases without a usable release date and tracks without
    a positive track number cannot be ordered and are skipped.
    """

    gateway: SpotifyGateway
    limiter: CallLimiter = field(default_factory=nullcontext)
    tracks_limit: int = RELEASE_TRACKS_LIMIT

    async def iter_collect(
        self,
        releases: Sequence[Release],
        *,
        access_token: str,
    ) -> AsyncIterator[tuple[Release, list[Track]]]:
        for release in releases:
            try:
                async with self.limiter:
                    listings = await self.gateway.release_tracks(
                        access_token,
                        release.id,
                        limit=self.tracks_limit,
                    )
            except UpstreamError as exc:
                raise TrackFetchError.from_upstream(
                    f"Could not fetch tracks for album {release.id} ({release.name})", exc
                ) from exc

            yield release, _stamp_tracks(release, listings)

    async def collect(self, releases: Sequence[Release], *, access_token: str) -> list[Track]:
        tracks: list[Track] = []
        async for _release, release_tracks in self.iter_collect(
            releases, access_token=access_token
        ):
            tracks.extend(release_tracks)
        return tracks


def _stamp_tracks(release: Release, listings: Sequence[TrackListing]) -> list[Track]:
    if release.release_date is None:
        log.warning(
            f"Skipping album {release.id} ({release.name}): no usable release date, "
            f"{len(listings)} tracks dropped"
        )
        return []

    tracks: list[Track] = []
    for listing in listings:
        if listing.track_number is None or listing.track_number < 1:
            log.warning(
                f"Skipping track {listing.uri} on album {release.id}: "
                f"invalid track number {listing.track_number}"
            )
            continue
        tracks.append(Track.from_listing(listing, release))
    return tracks
