from __future__ import annotations

import pytest

from labelist.config.spotify import SpotifyConfig
from tests.support.gateway import FakeGateway, RecordingSleep


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(
        client_id="client-id",
        client_secret="client-secret",  # noqa: S106
        redirect_uri="http://127.0.0.1:8888/callback",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
