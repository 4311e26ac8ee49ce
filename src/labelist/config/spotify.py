"""Spotify configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_float, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1/"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_TIMEOUT_SECONDS = 30.0
SPOTIFY_MARKET = "US"

SPOTIFY_PLAYLIST_SCOPES = ("playlist-modify-private",)


@dataclass(frozen=True)
class SpotifyConfig:
    """Client credentials for the authorization-code flow."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: tuple[str, ...] = field(default_factory=lambda: SPOTIFY_PLAYLIST_SCOPES)


@dataclass(frozen=True)
class PacingConfig:
    """Fixed pauses (seconds) taken after each call of a pipeline stage."""

    search_delay_seconds: float = 0.5
    tracks_delay_seconds: float = 0.2
    append_delay_seconds: float = 0.3


def get_spotify_config(*, scope: tuple[str, ...] | None = None) -> SpotifyConfig:
    values = require_env_vars(
        (
            "SPOTIFY_CLIENT_ID",
            "SPOTIFY_CLIENT_SECRET",
            "SPOTIFY_REDIRECT_URI",
        )
    )
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        redirect_uri=values["SPOTIFY_REDIRECT_URI"],
        scope=scope or SPOTIFY_PLAYLIST_SCOPES,
    )


def get_pacing_config() -> PacingConfig:
    defaults = PacingConfig()
    return PacingConfig(
        search_delay_seconds=optional_env_float(
            "LABELIST_SEARCH_DELAY", defaults.search_delay_seconds
        ),
        tracks_delay_seconds=optional_env_float(
            "LABELIST_TRACKS_DELAY", defaults.tracks_delay_seconds
        ),
        append_delay_seconds=optional_env_float(
            "LABELIST_APPEND_DELAY", defaults.append_delay_seconds
        ),
    )


def spotify_resilience_config(*, max_retries: int = 0) -> ResilienceConfig:
    if max_retries < 0:
        raise ValueError("max_retries must be non-negative")
    return ResilienceConfig(
        name="spotify",
        base_url=SPOTIFY_API_BASE_URL,
        timeout_seconds=SPOTIFY_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=max_retries),
    )
