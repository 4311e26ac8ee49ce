"""Entities handled during a single label-to-playlist run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


class ReleaseDatePrecision(StrEnum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: str
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class Session:
    """Credentials of the account the playlist is written to.

    Built once per run after the token exchange and profile lookup, then
    dropped when the run ends.
    """

    access_token: str = field(repr=False)
    user_id: str
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class Release:
    id: str
    name: str
    release_date: date | None
    release_date_precision: ReleaseDatePrecision = ReleaseDatePrecision.DAY


@dataclass(frozen=True, slots=True)
class ReleasePage:
    """One page of a catalog search.

    ``received`` counts the raw items the platform sent, including entries that
    could not be turned into a ``Release``.
    """

    releases: list[Release]
    total: int
    offset: int
    limit: int
    received: int = 0


@dataclass(frozen=True, slots=True)
class TrackListing:
    """A track as listed on its release, before it is stamped for sorting."""

    uri: str
    track_number: int | None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Track:
    uri: str
    track_number: int
    release_id: str
    release_name: str
    release_date: date

    @classmethod
    def from_listing(cls, listing: TrackListing, release: Release) -> Track:
        if release.release_date is None:
            raise ValueError(f"Release {release.id} has no usable release date")
        if listing.track_number is None or listing.track_number < 1:
            raise ValueError(f"Track {listing.uri} has no usable track number")
        return cls(
            uri=listing.uri,
            track_number=listing.track_number,
            release_id=release.id,
            release_name=release.name,
            release_date=release.release_date,
        )


@dataclass(frozen=True, slots=True)
class Playlist:
    id: str
    name: str
    external_url: str | None = None
