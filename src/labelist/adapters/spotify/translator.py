"""Translate Spotify payloads into domain entities."""

from __future__ import annotations

import re
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.domain.model import (
    Playlist,
    Release,
    ReleaseDatePrecision,
    TrackListing,
    UserProfile,
)

if TYPE_CHECKING:
    from .schema import SpotifyAlbum, SpotifyPlaylist, SpotifySimplifiedTrack, SpotifyUser

log = getLogger(__name__)

_RELEASE_DATE_PATTERN = re.compile(r"^(\d{4})(?:-(\d{2})(?:-(\d{2}))?)?$")


def parse_release_date(value: str | None) -> tuple[date | None, ReleaseDatePrecision]:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` into a calendar date.

    Year and month precision resolve to the first day of the period.
    """

    if not value:
        return None, ReleaseDatePrecision.DAY
    match = _RELEASE_DATE_PATTERN.match(value.strip())
    if match is None:
        return None, ReleaseDatePrecision.DAY
    year, month, day = match.groups()
    if month is None:
        precision = ReleaseDatePrecision.YEAR
    elif day is None:
        precision = ReleaseDatePrecision.MONTH
    else:
        precision = ReleaseDatePrecision.DAY
    try:
        parsed = date(int(year), int(month or 1), int(day or 1))
    except ValueError:
        return None, precision
    return parsed, precision


def translate_album(album: SpotifyAlbum) -> Release:
    release_date, precision = parse_release_date(album.release_date)
    if release_date is None:
        log.debug(f"Unparseable release date {album.release_date!r} for album {album.id}")
    return Release(
        id=album.id,
        name=album.name,
        release_date=release_date,
        release_date_precision=precision,
    )


def translate_track(track: SpotifySimplifiedTrack) -> TrackListing:
    return TrackListing(uri=track.uri, track_number=track.track_number, name=track.name)


def translate_playlist(playlist: SpotifyPlaylist) -> Playlist:
    return Playlist(
        id=playlist.id,
        name=playlist.name,
        external_url=playlist.external_urls.get("spotify"),
    )


def translate_user(user: SpotifyUser) -> UserProfile:
    return UserProfile(id=user.id, display_name=user.display_name)
