"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .spotify import (
    SPOTIFY_API_BASE_URL,
    SPOTIFY_MARKET,
    SPOTIFY_PLAYLIST_SCOPES,
    SPOTIFY_TOKEN_URL,
    PacingConfig,
    SpotifyConfig,
    get_pacing_config,
    get_spotify_config,
    spotify_resilience_config,
)

__all__ = [
    "SPOTIFY_API_BASE_URL",
    "SPOTIFY_MARKET",
    "SPOTIFY_PLAYLIST_SCOPES",
    "SPOTIFY_TOKEN_URL",
    "ConfigurationError",
    "MissingConfigurationError",
    "PacingConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "configure_logging",
    "get_pacing_config",
    "get_spotify_config",
    "optional_env_float",
    "require_env_vars",
    "spotify_resilience_config",
]
