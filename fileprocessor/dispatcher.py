"""Hands each incoming file to the orchestration service exactly once.

The dispatcher holds only immutable configuration, so a single instance
can serve concurrent invocations from the Functions host.
"""

import logging
from time import monotonic
from dataclasses import dataclass
from typing import BinaryIO, Callable, Dict, Optional, Protocol

from .errors import InvalidInput, ProcessingTimeout

logger = logging.getLogger(__name__)

API_KEY_NAME = "x-api-key"
CONTAINER_NAME_KEY = "ContainerName"


@dataclass
class IncomingFile:
    name: str
    content: BinaryIO


class Processor(Protocol):
    def run(self, stream: BinaryIO) -> str:
        ...


ProcessorFactory = Callable[[Dict[str, str]], Processor]


def build_request_context(api_key: str, name: str) -> Dict[str, str]:
    return {API_KEY_NAME: api_key, CONTAINER_NAME_KEY: name}


class Dispatcher:
    def __init__(
        self,
        api_key: str,
        processor_factory: ProcessorFactory,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self._processor_factory = processor_factory
        self._timeout = timeout

    def handle(self, file: IncomingFile, timeout: Optional[float] = None) -> str:
        """Process one file and return the orchestration result.

        Raises InvalidInput for a blank name, ProcessingTimeout when no time
        is left before the call, and anything the processor raises, unchanged.
        A result that arrives after the limit is logged at WARNING and
        still returned.
        The stream is left open for the host to release.
        """
        if not file.name or not file.name.strip():
            logger.error("[Dispatch] Rejected incoming file with empty name")
            raise InvalidInput("Incoming file name must not be empty")

        limit = self._timeout if timeout is None else timeout
        if limit is not None and limit <= 0:
            logger.error(f"[Dispatch] No time left to process {file.name}")
            raise ProcessingTimeout(f"Deadline already passed for {file.name}")

        context = build_request_context(self._api_key, file.name)
        logger.debug(f"[Dispatch] Processing {file.name}")

        started = monotonic()
        try:
            processor = self._processor_factory(context)
            result = processor.run(file.content)
        except Exception:
            logger.exception(f"[Dispatch] Processing failed for {file.name}")
            raise

        elapsed = monotonic() - started
        if limit is not None and elapsed > limit:
            logger.warning(
                f"[Dispatch] Processing {file.name} took {elapsed:.1f}s, limit is {limit}s"
            )

        logger.info(result)
        return result
