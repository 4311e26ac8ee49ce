"""Authorization-code exchange and profile lookup."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.domain.errors import (
    AuthExchangeError,
    InputError,
    ProfileFetchError,
    UpstreamError,
)

if TYPE_CHECKING:
    from labelist.domain.model import UserProfile
    from labelist.domain.ports import SpotifyGateway

log = getLogger(__name__)


@dataclass(slots=True)
class TokenExchanger:
    gateway: SpotifyGateway

    async def exchange(self, code: str) -> str:
        """Trade an authorization code for an access token. Never retried."""

        if not code or not code.strip():
            raise InputError("Authorization code must not be empty")
        try:
            token = await self.gateway.exchange_code(code.strip())
        except UpstreamError as exc:
            raise AuthExchangeError.from_upstream("Could not obtain an access token", exc) from exc
        log.info("Access token received")
        return token


@dataclass(slots=True)
class ProfileLookup:
    gateway: SpotifyGateway

    async def fetch(self, access_token: str) -> UserProfile:
        try:
            profile = await self.gateway.current_user(access_token)
        except UpstreamError as exc:
            raise ProfileFetchError.from_upstream("Could not fetch the user profile", exc) from exc
        log.info(f"Logged in as: {profile.display_name} (ID: {profile.id})")
        return profile
