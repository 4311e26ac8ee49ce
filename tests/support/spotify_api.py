"""``httpx.MockTransport`` handler imitating the Spotify Web API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from labelist.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from labelist.config.http_resilience import ResilienceConfig


def album_payload(album_id: str, release_date: str, *, precision: str = "day") -> dict[str, object]:
    return {
        "id": album_id,
        "name": f"Album {album_id}",
        "release_date": release_date,
        "release_date_precision": precision,
        "album_type": "album",
    }


def track_payload(album_id: str, number: int) -> dict[str, object]:
    return {
        "id": f"{album_id}t{number}",
        "name": f"Track {number}",
        "uri": f"spotify:track:{album_id}t{number}",
        "track_number": number,
        "disc_number": 1,
    }


@dataclass
class FakeSpotifyAPI:
    albums: list[dict[str, object]] = field(default_factory=list)
    tracks: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    # (method, path) -> status codes returned for consecutive calls before succeeding
    scripted_failures: dict[tuple[str, str], list[int]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    added: list[list[str]] = field(default_factory=list)

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        pending = self.scripted_failures.get(key)
        if pending:
            status = pending.pop(0)
            return httpx.Response(
                status_code=status,
                json={"error": {"status": status, "message": "scripted failure"}},
            )

        path = request.url.path
        if request.method == "POST" and path == "/api/token":
            return httpx.Response(
                200,
                json={"access_token": "access-123", "token_type": "Bearer", "expires_in": 3600},
            )
        if request.method == "GET" and path == "/v1/me":
            return httpx.Response(200, json={"id": "user-1", "display_name": "Demo User"})
        if request.method == "GET" and path == "/v1/search":
            offset = int(request.url.params["offset"])
            limit = int(request.url.params["limit"])
            return httpx.Response(
                200,
                json={
                    "albums": {
                        "items": self.albums[offset : offset + limit],
                        "total": len(self.albums),
                        "limit": limit,
                        "offset": offset,
                    }
                },
            )
        if request.method == "GET" and path.startswith("/v1/albums/"):
            album_id = path.split("/")[3]
            return httpx.Response(200, json={"items": self.tracks.get(album_id, [])})
        if request.method == "POST" and path.startswith("/v1/users/"):
            return httpx.Response(
                201,
                json={
                    "id": "pl-1",
                    "name": json.loads(request.content)["name"],
                    "external_urls": {"spotify": "https://open.spotify.com/playlist/pl-1"},
                },
            )
        if request.method == "POST" and path == "/v1/playlists/pl-1/tracks":
            self.added.append(json.loads(request.content)["uris"])
            return httpx.Response(201, json={"snapshot_id": f"snap-{len(self.added)}"})
        return httpx.Response(404, json={"error": {"status": 404, "message": "not found"}})

    def client_factory(self) -> Callable[[ResilienceConfig], ResilientClient]:
        def factory(resilience: ResilienceConfig) -> ResilientClient:
            return ResilientClient(resilience, transport=httpx.MockTransport(self.handler))

        return factory
