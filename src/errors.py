"""
Pipeline Error Types.

Every failure the summary pipeline can report derives from PerfyzerError and
names the stage it came from, so the caller can tell where a run stopped
without re-running it with verbose tracing.

Propagation:
- CommentFetchFailed is recovered locally as an empty comment sequence.
- Every other error aborts the run.
"""

from typing import Optional


class PerfyzerError(Exception):
    """Base class for pipeline errors."""

    stage = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class SourceUnavailable(PerfyzerError):
    """The activity query failed or returned malformed data."""

    stage = "activity query"


class CommentFetchFailed(PerfyzerError):
    """A comment query for a single item failed."""

    stage = "comment query"


class SerializationFailed(PerfyzerError):
    """An activity record could not be rendered into the prompt payload."""

    stage = "prompt synthesis"


class UpstreamError(PerfyzerError):
    """
    The completion endpoint returned a non-success response.

    Attributes:
        body (str): Raw response body, surfaced verbatim for diagnostics
        status_code (Optional[int]): HTTP status, None for transport failures
    """

    stage = "completion request"

    def __init__(self, message: str, body: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.body = body
        self.status_code = status_code

    def __str__(self) -> str:
        text = super().__str__()
        return f"{text}: {self.body}" if self.body else text


class NoCompletionError(PerfyzerError):
    """The completion endpoint succeeded but returned no usable choice."""

    stage = "completion request"
