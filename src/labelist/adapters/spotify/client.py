"""HTTP gateway for the Spotify Web API."""

from __future__ import annotations

import base64
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from labelist.adapters.http_resilience import ResilientClient
from labelist.config.spotify import (
    SPOTIFY_MARKET,
    SPOTIFY_TOKEN_URL,
    SpotifyConfig,
    spotify_resilience_config,
)
from labelist.domain.errors import UpstreamError
from labelist.domain.model import ReleasePage
from labelist.domain.ports import SpotifyGateway

from .schema import (
    AlbumSearchResponse,
    AlbumTracksPage,
    SnapshotResponse,
    SpotifyPlaylist,
    SpotifyUser,
    TokenResponse,
)
from .translator import translate_album, translate_playlist, translate_track, translate_user

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from labelist.config.http_resilience import ResilienceConfig
    from labelist.domain.model import Playlist, TrackListing, UserProfile

log = getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _basic_auth_header(config: SpotifyConfig) -> str:
    raw = f"{config.client_id}:{config.client_secret}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _bearer(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _response_payload(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


class SpotifyWebClient:
    """Spotify implementation of ``SpotifyGateway``.

    One instance holds one HTTP connection pool; use it as an async context
    manager around a single pipeline run.
    """

    def __init__(
        self,
        *,
        config: SpotifyConfig,
        resilience: ResilienceConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        market: str = SPOTIFY_MARKET,
    ) -> None:
        self._config = config
        self._resilience = resilience or spotify_resilience_config()
        self._client_factory = client_factory or _default_client_factory
        self._market = market
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> SpotifyWebClient:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("SpotifyWebClient must be used as an async context manager")
        return self._client

    async def exchange_code(self, code: str) -> str:
        response = await self._send(
            "token exchange",
            "POST",
            SPOTIFY_TOKEN_URL,
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._config.redirect_uri,
            },
            headers={"Authorization": _basic_auth_header(self._config)},
        )
        token = self._parse("token exchange", response, TokenResponse)
        if not token.access_token:
            raise UpstreamError(
                "Token response did not contain an access_token",
                status=response.status_code,
                payload=_response_payload(response),
            )
        return token.access_token

    async def current_user(self, access_token: str) -> UserProfile:
        response = await self._send("profile lookup", "GET", "me", headers=_bearer(access_token))
        return translate_user(self._parse("profile lookup", response, SpotifyUser))

    async def search_releases(
        self,
        access_token: str,
        *,
        query: str,
        limit: int,
        offset: int,
    ) -> ReleasePage:
        response = await self._send(
            "album search",
            "GET",
            "search",
            headers=_bearer(access_token),
            params={
                "q": query,
                "type": "album",
                "market": self._market,
                "limit": limit,
                "offset": offset,
            },
        )
        page = self._parse("album search", response, AlbumSearchResponse).albums
        return ReleasePage(
            releases=[translate_album(album) for album in page.items if album is not None],
            total=page.total,
            offset=offset,
            limit=limit,
            received=len(page.items),
        )

    async def release_tracks(
        self,
        access_token: str,
        release_id: str,
        *,
        limit: int,
    ) -> list[TrackListing]:
        what = f"tracks of album {release_id}"
        response = await self._send(
            what,
            "GET",
            f"albums/{quote(release_id, safe='')}/tracks",
            headers=_bearer(access_token),
            params={"market": self._market, "limit": limit},
        )
        page = self._parse(what, response, AlbumTracksPage)
        return [translate_track(track) for track in page.items]

    async def create_playlist(
        self,
        access_token: str,
        *,
        user_id: str,
        name: str,
        description: str,
        public: bool,
    ) -> Playlist:
        response = await self._send(
            "playlist creation",
            "POST",
            f"users/{quote(user_id, safe='')}/playlists",
            headers=_bearer(access_token),
            json={"name": name, "public": public, "description": description},
        )
        return translate_playlist(self._parse("playlist creation", response, SpotifyPlaylist))

    async def add_tracks(
        self,
        access_token: str,
        playlist_id: str,
        uris: Sequence[str],
    ) -> None:
        response = await self._send(
            "playlist append",
            "POST",
            f"playlists/{quote(playlist_id, safe='')}/tracks",
            headers=_bearer(access_token),
            json={"uris": list(uris)},
        )
        if not response.content:
            return
        snapshot = self._parse("playlist append", response, SnapshotResponse)
        log.debug(f"Playlist {playlist_id} now at snapshot {snapshot.snapshot_id}")

    async def _send(
        self,
        what: str,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str | int] | None = None,
        data: dict[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                json=json,
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Spotify {what} request failed: {exc!r}") from exc

        if not response.is_success:
            payload = _response_payload(response)
            log.error(f"Spotify {what} returned HTTP {response.status_code}: {payload}")
            raise UpstreamError(
                f"Spotify {what} returned HTTP {response.status_code}",
                status=response.status_code,
                payload=payload,
            )
        return response

    def _parse(self, what: str, response: httpx.Response, model: type[ModelT]) -> ModelT:
        payload = _response_payload(response)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError(
                f"Unexpected Spotify {what} payload",
                status=response.status_code,
                payload=payload,
            ) from exc


if TYPE_CHECKING:
    _gateway_check: SpotifyGateway = SpotifyWebClient(
        config=SpotifyConfig(client_id="", client_secret="", redirect_uri="")
    )
