from .dispatcher import Dispatcher, IncomingFile, Processor, build_request_context
from .errors import (
    ConfigurationError,
    IngestionError,
    InvalidInput,
    ProcessingTimeout,
    ProcessorFailure,
)
from .settings import Settings

__all__ = [
    "ConfigurationError",
    "Dispatcher",
    "IncomingFile",
    "IngestionError",
    "InvalidInput",
    "ProcessingTimeout",
    "Processor",
    "ProcessorFailure",
    "Settings",
    "build_request_context",
]
