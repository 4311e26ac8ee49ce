"""Progress events emitted while a pipeline run advances."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

USER_FAILURE_MESSAGE = "Error during processing. Check logs for details."


class PipelineState(StrEnum):
    IDLE = "idle"
    TOKEN_EXCHANGE = "token_exchange"
    PROFILE_LOOKUP = "profile_lookup"
    SEARCHING = "searching"
    COLLECTING = "collecting"
    SORTING = "sorting"
    PLAYLIST_CREATE = "playlist_create"
    APPENDING_TRACKS = "appending_tracks"
    COMPLETE = "complete"
    FAILED = "failed"


CHECKPOINTS: dict[PipelineState, int] = {
    PipelineState.IDLE: 0,
    PipelineState.TOKEN_EXCHANGE: 10,
    PipelineState.PROFILE_LOOKUP: 20,
    PipelineState.SEARCHING: 30,
    PipelineState.COLLECTING: 40,
    PipelineState.SORTING: 65,
    PipelineState.PLAYLIST_CREATE: 80,
    PipelineState.APPENDING_TRACKS: 90,
    PipelineState.COMPLETE: 100,
}

TERMINAL_STATES = frozenset({PipelineState.COMPLETE, PipelineState.FAILED})


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    state: PipelineState
    message: str
    percent: int
    playlist_url: str | None = None
    error_kind: str | None = None
    detail: str | None = None

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def failed(self) -> bool:
        return self.state is PipelineState.FAILED


class ProgressObserver(Protocol):
    def __call__(self, event: ProgressEvent) -> None: ...


def interpolate_percent(start: int, end: int, done: int, total: int) -> int:
    """Percent for ``done`` of ``total`` sub-steps between two checkpoints."""

    if total <= 0:
        return end
    done = min(max(done, 0), total)
    return start + ((end - start) * done) // total
