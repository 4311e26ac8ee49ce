"""Sequence one label-to-playlist run and report its progress."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.domain.errors import InputError, PipelineBusyError, PipelineError
from labelist.domain.model import Session

from .auth import ProfileLookup, TokenExchanger
from .collector import TrackCollector
from .context import RunContext
from .progress import CHECKPOINTS, PipelineState, interpolate_percent
from .search import ReleaseSearch
from .sorting import sort_chronologically
from .writer import PlaylistWriter

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from labelist.domain.model import Playlist, Track
    from labelist.domain.ports import CallLimiter, SpotifyGateway

    from .progress import ProgressEvent, ProgressObserver

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Terminal result of a run, derived from its final progress event."""

    succeeded: bool
    message: str
    playlist: Playlist | None = None
    track_count: int = 0
    error_kind: str | None = None
    detail: str | None = None

    @property
    def playlist_url(self) -> str | None:
        return self.playlist.external_url if self.playlist is not None else None


@dataclass(slots=True)
class LabelPlaylistPipeline:
    """Linear state machine from authorization code to a filled playlist.

    ``Idle -> TokenExchange -> ProfileLookup -> Searching -> Collecting ->
    Sorting -> PlaylistCreate -> AppendingTracks -> Complete``; the first
    ``PipelineError`` from any stage moves the run to ``Failed`` and nothing
    after it is called. Calls are issued one at a time.
    """

    gateway: SpotifyGateway
    search_limiter: CallLimiter = field(default_factory=nullcontext)
    tracks_limiter: CallLimiter = field(default_factory=nullcontext)
    append_limiter: CallLimiter = field(default_factory=nullcontext)
    keep_releases_together: bool = False
    _active: bool = field(default=False, init=False, repr=False)

    async def stream(
        self,
        label_name: str,
        authorization_code: str,
        *,
        context: RunContext | None = None,
    ) -> AsyncIterator[ProgressEvent]:
        """Yield progress events, ending with exactly one terminal event.

        Raises ``PipelineBusyError`` if this pipeline is already running.
        """

        if self._active:
            raise PipelineBusyError("A pipeline run is already in progress")
        self._active = True
        run = context or RunContext(label=label_name or "")
        try:
            try:
                async for event in self._run(run, authorization_code):
                    yield event
            except PipelineError as exc:
                _log_failure(run, exc)
                yield run.fail(exc)
            except Exception as exc:
                log.exception(f"Unexpected error in state {run.state}")
                yield run.fail(exc)
        finally:
            run.session = None
            self._active = False

    async def run(
        self,
        label_name: str,
        authorization_code: str,
        *,
        observer: ProgressObserver | None = None,
    ) -> RunOutcome:
        """Drive ``stream`` to the end and summarise the run."""

        context = RunContext(label=label_name or "")
        last: ProgressEvent | None = None
        async for event in self.stream(label_name, authorization_code, context=context):
            last = event
            if observer is not None:
                observer(event)

        if last is None or last.failed:
            return RunOutcome(
                succeeded=False,
                message=last.message if last else "Pipeline produced no events",
                playlist=context.playlist,
                track_count=context.track_count,
                error_kind=last.error_kind if last else None,
                detail=last.detail if last else None,
            )
        return RunOutcome(
            succeeded=True,
            message=last.message,
            playlist=context.playlist,
            track_count=context.track_count,
        )

    async def _run(self, context: RunContext, code: str) -> AsyncIterator[ProgressEvent]:
        label = context.label
        if not label.strip():
            raise InputError("Label name must not be empty")
        if not code or not code.strip():
            raise InputError("Authorization code must not be empty")

        yield context.advance(
            PipelineState.TOKEN_EXCHANGE, "Exchanging authorization code for an access token..."
        )
        access_token = await TokenExchanger(self.gateway).exchange(code)

        yield context.advance(PipelineState.PROFILE_LOOKUP, "Fetching your Spotify profile...")
        profile = await ProfileLookup(self.gateway).fetch(access_token)
        context.session = Session(
            access_token=access_token,
            user_id=profile.id,
            display_name=profile.display_name,
        )
        session = context.require_session()

        yield context.advance(
            PipelineState.SEARCHING, f'Searching for albums with label "{label}"...'
        )
        search = ReleaseSearch(self.gateway, limiter=self.search_limiter)
        releases = await search.search(label, access_token=session.access_token)

        yield context.advance(
            PipelineState.COLLECTING,
            f"Found {len(releases)} albums. Fetching their tracks...",
        )
        collector = TrackCollector(self.gateway, limiter=self.tracks_limiter)
        tracks: list[Track] = []
        done = 0
        async for release, release_tracks in collector.iter_collect(
            releases, access_token=session.access_token
        ):
            done += 1
            tracks.extend(release_tracks)
            yield context.advance(
                PipelineState.COLLECTING,
                f"Fetched tracks for album {done} of {len(releases)}: {release.name}",
                percent=interpolate_percent(
                    CHECKPOINTS[PipelineState.COLLECTING],
                    CHECKPOINTS[PipelineState.SORTING],
                    done,
                    len(releases),
                ),
            )

        if not tracks:
            log.info(f'No tracks found for label "{label}"; no playlist created')
            yield context.advance(PipelineState.COMPLETE, f'No tracks found for label "{label}".')
            return

        yield context.advance(
            PipelineState.SORTING, f"Sorting {len(tracks)} tracks chronologically..."
        )
        ordered = sort_chronologically(tracks, keep_releases_together=self.keep_releases_together)
        uris = [track.uri for track in ordered]
        context.track_count = len(uris)
        log.info(f"Total tracks to add: {len(uris)}")

        yield context.advance(PipelineState.PLAYLIST_CREATE, "Creating playlist...")
        writer = PlaylistWriter(self.gateway, limiter=self.append_limiter)
        playlist = await writer.create(session, label)
        context.playlist = playlist

        yield context.advance(
            PipelineState.APPENDING_TRACKS,
            f"Adding {len(uris)} tracks to the playlist...",
        )
        async for batch in writer.iter_append(session, playlist, uris):
            yield context.advance(
                PipelineState.APPENDING_TRACKS,
                f"Added batch {batch.index} of {batch.count} ({batch.appended} tracks)",
                percent=interpolate_percent(
                    CHECKPOINTS[PipelineState.APPENDING_TRACKS],
                    CHECKPOINTS[PipelineState.COMPLETE] - 1,
                    batch.index,
                    batch.count,
                ),
            )

        log.info("All tracks added to the playlist successfully.")
        yield context.advance(
            PipelineState.COMPLETE,
            f'Playlist created with {len(uris)} tracks: "{playlist.name}"',
            playlist_url=playlist.external_url,
        )


def _log_failure(context: RunContext, error: PipelineError) -> None:
    log.error(f"Pipeline failed in state {context.state}: {error.kind}: {error}")
    if error.status is not None or error.payload is not None:
        log.error(f"Upstream response: status={error.status} payload={error.payload}")
