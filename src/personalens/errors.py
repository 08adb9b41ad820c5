"""Error taxonomy for the persona analysis pipeline.

Every failure the pipeline can surface derives from ``PipelineError``. The
``code`` and ``status_code`` class attributes let the HTTP and CLI boundaries
report a failure without inspecting its type.
"""


class PipelineError(Exception):
    """Base class for analysis pipeline failures."""

    code = "pipeline_error"
    status_code = 500


class InputError(PipelineError):
    """Missing or unusable input data (client-side fault)."""

    code = "input_error"
    status_code = 400


class InsufficientDataError(InputError):
    """Fewer records than the estimated number of clusters."""

    code = "insufficient_data"

    def __init__(self, record_count: int, k: int) -> None:
        super().__init__(
            "Not enough data to form the estimated number of clusters "
            f"({record_count} records, k={k})."
        )
        self.record_count = record_count
        self.k = k


class MalformedResponseError(PipelineError):
    """LLM output could not be reduced to the expected JSON object."""

    code = "malformed_response"


class ClusteringError(PipelineError):
    """Numeric fault raised by the clustering library."""

    code = "clustering_error"


class UpstreamError(PipelineError):
    """The LLM call itself failed (network, auth, rate limit, timeout)."""

    code = "upstream_error"
