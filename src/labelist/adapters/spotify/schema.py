"""Minimal Pydantic models for the Spotify Web API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TokenResponse(SpotifyBaseModel):
    access_token: str | None = None
    token_type: str | None = None
    scope: str | None = None
    expires_in: int | None = None


class SpotifyUser(SpotifyBaseModel):
    id: str
    display_name: str | None = None


class SpotifyAlbum(SpotifyBaseModel):
    id: str
    name: str
    release_date: str | None = None
    release_date_precision: str | None = None


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    previous: str | None = None
    total: int = Field(default=0, ge=0)


class AlbumSearchPage(SpotifyPage):
    # the search endpoint occasionally returns null entries
    items: list[SpotifyAlbum | None] = Field(default_factory=list)


class AlbumSearchResponse(SpotifyBaseModel):
    albums: AlbumSearchPage


class SpotifySimplifiedTrack(SpotifyBaseModel):
    uri: str
    track_number: int | None = None
    id: str | None = None
    name: str | None = None
    disc_number: int | None = None


class AlbumTracksPage(SpotifyPage):
    items: list[SpotifySimplifiedTrack] = Field(default_factory=list)


class SpotifyPlaylist(SpotifyBaseModel):
    id: str
    name: str
    external_urls: dict[str, str] = Field(default_factory=dict)


class SnapshotResponse(SpotifyBaseModel):
    snapshot_id: str | None = None
