"""Error taxonomy for a label-to-playlist run.

Every pipeline stage raises its own ``PipelineError`` subclass. All of them are
terminal: nothing is retried or recovered inside the pipeline.
"""

from __future__ import annotations


class UpstreamError(RuntimeError):
    """Raised by gateways when the streaming platform rejects or fails a call.

    ``status`` is ``None`` for transport-level failures (DNS, timeouts, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        payload: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload


class PipelineError(RuntimeError):
    """Base class for failures that end a pipeline run."""

    default_message = "Pipeline failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        payload: object | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.status = status
        self.payload = payload

    @property
    def kind(self) -> str:
        return type(self).__name__

    @classmethod
    def from_upstream(cls, message: str, error: UpstreamError) -> PipelineError:
        return cls(f"{message}: {error}", status=error.status, payload=error.payload)


class InputError(PipelineError):
    default_message = "Invalid pipeline input"


class AuthExchangeError(PipelineError):
    default_message = "Authorization code exchange failed"


class ProfileFetchError(PipelineError):
    default_message = "Fetching the user profile failed"


class SearchError(PipelineError):
    default_message = "Catalog search failed"


class TrackFetchError(PipelineError):
    default_message = "Fetching release tracks failed"


class PlaylistCreateError(PipelineError):
    default_message = "Creating the playlist failed"


class PlaylistAppendError(PipelineError):
    """Raised when a batch append fails; earlier batches stay on the playlist."""

    default_message = "Adding tracks to the playlist failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        payload: object | None = None,
        appended: int = 0,
    ) -> None:
        super().__init__(message, status=status, payload=payload)
        self.appended = appended


class PipelineBusyError(RuntimeError):
    """Raised when a pipeline instance is asked to start a second concurrent run."""
