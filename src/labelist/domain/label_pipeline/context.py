"""Run-scoped state for one label-to-playlist run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .progress import CHECKPOINTS, USER_FAILURE_MESSAGE, PipelineState, ProgressEvent

if TYPE_CHECKING:
    from labelist.domain.model import Playlist, Session


@dataclass(slots=True)
class RunContext:
    """Everything a run owns; passed explicitly, never shared between runs."""

    label: str
    session: Session | None = None
    playlist: Playlist | None = None
    state: PipelineState = PipelineState.IDLE
    percent: int = 0
    track_count: int = 0

    def require_session(self) -> Session:
        if self.session is None:
            raise RuntimeError("No session yet: the token exchange has not completed")
        return self.session

    def advance(
        self,
        state: PipelineState,
        message: str,
        *,
        percent: int | None = None,
        playlist_url: str | None = None,
    ) -> ProgressEvent:
        target = CHECKPOINTS[state] if percent is None else percent
        # percent never moves backwards within a run
        self.percent = min(100, max(self.percent, target))
        self.state = state
        return ProgressEvent(
            state=state,
            message=message,
            percent=self.percent,
            playlist_url=playlist_url,
        )

    def fail(self, error: Exception) -> ProgressEvent:
        self.state = PipelineState.FAILED
        return ProgressEvent(
            state=PipelineState.FAILED,
            message=USER_FAILURE_MESSAGE,
            percent=self.percent,
            error_kind=type(error).__name__,
            detail=str(error),
        )
