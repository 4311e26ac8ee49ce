"""Spotify adapter package."""

from __future__ import annotations

from .client import SpotifyWebClient
from .schema import (
    AlbumSearchResponse,
    AlbumTracksPage,
    SpotifyAlbum,
    SpotifyPlaylist,
    SpotifySimplifiedTrack,
    SpotifyUser,
    TokenResponse,
)
from .translator import (
    parse_release_date,
    translate_album,
    translate_playlist,
    translate_track,
    translate_user,
)

__all__ = [
    "AlbumSearchResponse",
    "AlbumTracksPage",
    "SpotifyAlbum",
    "SpotifyPlaylist",
    "SpotifySimplifiedTrack",
    "SpotifyUser",
    "SpotifyWebClient",
    "TokenResponse",
    "parse_release_date",
    "translate_album",
    "translate_playlist",
    "translate_track",
    "translate_user",
]
