"""Obtain an authorization code through the browser-based OAuth flow."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth

if TYPE_CHECKING:
    from labelist.config.spotify import SpotifyConfig

log = getLogger(__name__)


def build_oauth(config: SpotifyConfig, *, open_browser: bool = True) -> SpotifyOAuth:
    # tokens are never cached: every run starts from a fresh authorization code
    return SpotifyOAuth(
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=config.redirect_uri,
        scope=" ".join(config.scope),
        open_browser=open_browser,
        cache_handler=MemoryCacheHandler(),
    )


def acquire_authorization_code(
    config: SpotifyConfig,
    *,
    open_browser: bool = True,
    oauth: SpotifyOAuth | None = None,
) -> str:
    """Send the user to the Spotify consent page and capture the returned code.

    For a ``localhost`` redirect URI spotipy listens on that port for the
    callback; otherwise it asks for the redirected URL to be pasted.
    """

    active_oauth = oauth or build_oauth(config, open_browser=open_browser)
    if not open_browser:
        log.info(f"Open this URL to authorize access: {active_oauth.get_authorize_url()}")
    else:
        log.info("Opening browser for Spotify authentication...")
    return active_oauth.get_auth_response(open_browser=open_browser)
