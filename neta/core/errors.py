"""Error taxonomy for the neta pipeline.

Only ``ConfigurationError`` is allowed to escape an invocation. The others are
raised inside a single stage and converted into diagnostic text by the caller.
"""


class NetaError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(NetaError):
    """A required credential or setting is missing or invalid."""


class SourceFetchError(NetaError):
    """The news source could not produce items."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderError(NetaError):
    """The LLM provider call failed for one item."""


class MalformedResponseError(NetaError):
    """The LLM output could not be decoded into a JSON object."""
