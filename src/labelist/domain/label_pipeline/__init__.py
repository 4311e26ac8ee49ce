"""Label-to-playlist pipeline: search, collect, sort and write back."""

from __future__ import annotations

from .auth import ProfileLookup, TokenExchanger
from .collector import RELEASE_TRACKS_LIMIT, TrackCollector
from .context import RunContext
from .orchestrator import LabelPlaylistPipeline, RunOutcome
from .progress import (
    CHECKPOINTS,
    USER_FAILURE_MESSAGE,
    PipelineState,
    ProgressEvent,
    ProgressObserver,
)
from .search import SEARCH_PAGE_SIZE, ReleaseSearch, label_query
from .sorting import sort_chronologically
from .writer import (
    PLAYLIST_BATCH_SIZE,
    BatchResult,
    PlaylistWriter,
    batched,
    playlist_description,
    playlist_name,
)

__all__ = [
    "CHECKPOINTS",
    "PLAYLIST_BATCH_SIZE",
    "RELEASE_TRACKS_LIMIT",
    "SEARCH_PAGE_SIZE",
    "USER_FAILURE_MESSAGE",
    "BatchResult",
    "LabelPlaylistPipeline",
    "PipelineState",
    "PlaylistWriter",
    "ProfileLookup",
    "ProgressEvent",
    "ProgressObserver",
    "ReleaseSearch",
    "RunContext",
    "RunOutcome",
    "TokenExchanger",
    "TrackCollector",
    "batched",
    "label_query",
    "playlist_description",
    "playlist_name",
    "sort_chronologically",
]
