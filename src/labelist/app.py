"""Application entry points wiring configuration, adapters and the pipeline."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.adapters.http_resilience import FixedDelayLimiter, ResilientClient
from labelist.adapters.spotify import SpotifyWebClient
from labelist.config.spotify import PacingConfig, spotify_resilience_config
from labelist.domain.label_pipeline import LabelPlaylistPipeline

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from labelist.config.http_resilience import ResilienceConfig
    from labelist.config.spotify import SpotifyConfig
    from labelist.domain.label_pipeline import ProgressEvent, ProgressObserver, RunOutcome
    from labelist.domain.ports import SpotifyGateway

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]
    Sleeper = Callable[[float], Awaitable[None]]

log = getLogger(__name__)


def build_pipeline(
    gateway: SpotifyGateway,
    *,
    pacing: PacingConfig | None = None,
    keep_releases_together: bool = False,
    sleep: Sleeper = asyncio.sleep,
) -> LabelPlaylistPipeline:
    """Pipeline paced with fixed delays after every search, track and append call."""

    active_pacing = pacing or PacingConfig()
    return LabelPlaylistPipeline(
        gateway,
        search_limiter=FixedDelayLimiter(active_pacing.search_delay_seconds, sleep=sleep),
        tracks_limiter=FixedDelayLimiter(active_pacing.tracks_delay_seconds, sleep=sleep),
        append_limiter=FixedDelayLimiter(active_pacing.append_delay_seconds, sleep=sleep),
        keep_releases_together=keep_releases_together,
    )


async def run_pipeline(
    label_name: str,
    credentials: SpotifyConfig,
    authorization_code: str,
    *,
    pacing: PacingConfig | None = None,
    resilience: ResilienceConfig | None = None,
    client_factory: ClientFactory | None = None,
    keep_releases_together: bool = False,
    sleep: Sleeper = asyncio.sleep,
) -> AsyncIterator[ProgressEvent]:
    """Run one label-to-playlist pipeline and stream its progress events.

    The stream ends with a ``Complete`` event carrying the playlist URL or a
    single ``Failed`` event carrying the error kind.
    """

    log.info(f'Building chronological playlist for label "{label_name}"')
    async with SpotifyWebClient(
        config=credentials,
        resilience=resilience or spotify_resilience_config(),
        client_factory=client_factory,
    ) as gateway:
        pipeline = build_pipeline(
            gateway,
            pacing=pacing,
            keep_releases_together=keep_releases_together,
            sleep=sleep,
        )
        async for event in pipeline.stream(label_name, authorization_code):
            yield event


async def _build_label_playlist_async(
    label_name: str,
    credentials: SpotifyConfig,
    authorization_code: str,
    *,
    on_progress: ProgressObserver | None,
    pacing: PacingConfig | None,
    resilience: ResilienceConfig | None,
    client_factory: ClientFactory | None,
    keep_releases_together: bool,
    sleep: Sleeper,
) -> RunOutcome:
    async with SpotifyWebClient(
        config=credentials,
        resilience=resilience or spotify_resilience_config(),
        client_factory=client_factory,
    ) as gateway:
        pipeline = build_pipeline(
            gateway,
            pacing=pacing,
            keep_releases_together=keep_releases_together,
            sleep=sleep,
        )
        return await pipeline.run(label_name, authorization_code, observer=on_progress)


def build_label_playlist(
    label_name: str,
    *,
    credentials: SpotifyConfig,
    authorization_code: str,
    on_progress: ProgressObserver | None = None,
    pacing: PacingConfig | None = None,
    resilience: ResilienceConfig | None = None,
    client_factory: ClientFactory | None = None,
    keep_releases_together: bool = False,
    sleep: Sleeper = asyncio.sleep,
) -> RunOutcome:
    """Synchronous wrapper around one run; forwards every event to ``on_progress``."""

    outcome = asyncio.run(
        _build_label_playlist_async(
            label_name,
            credentials,
            authorization_code,
            on_progress=on_progress,
            pacing=pacing,
            resilience=resilience,
            client_factory=client_factory,
            keep_releases_together=keep_releases_together,
            sleep=sleep,
        )
    )
    if outcome.succeeded:
        log.info(
            f"Finished label playlist: tracks={outcome.track_count}, "
            f"url={outcome.playlist_url}"
        )
    else:
        log.info(f"Label playlist run failed: kind={outcome.error_kind}")
    return outcome
