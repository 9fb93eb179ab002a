"""Error kinds raised while ingesting a file.

Every one of them is logged and re-raised to the Functions host, which
decides whether the invocation is retried.
"""


class IngestionError(Exception):
    """Base class for all dispatcher errors."""


class InvalidInput(IngestionError):
    """The incoming file is missing a usable name."""


class ProcessorFailure(IngestionError):
    """The orchestration service rejected or failed the request."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ProcessingTimeout(IngestionError):
    """Processing did not finish within the allowed time."""


class ConfigurationError(IngestionError):
    """A required setting is missing or malformed."""
