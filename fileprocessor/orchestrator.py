"""HTTP client for the remote orchestration service."""

import logging
from typing import BinaryIO, Iterator, Mapping, Optional

import httpx

from .errors import ProcessingTimeout, ProcessorFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class HttpOrchestrationService:
    """Posts a file stream to the orchestration endpoint.

    The request context is sent as headers, so the API key travels as
    ``x-api-key`` and the file name as ``ContainerName``.
    """

    def __init__(
        self,
        context: Mapping[str, str],
        endpoint: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        self._headers = dict(context)
        self._endpoint = endpoint
        self._timeout = timeout
        self._client = client

    def run(self, stream: BinaryIO) -> str:
        owns_client = self._client is None
        client = httpx.Client(timeout=self._timeout) if owns_client else self._client
        try:
            response = client.post(
                self._endpoint,
                headers=self._headers,
                content=_chunks(stream),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProcessingTimeout(f"Orchestration service timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ProcessorFailure(
                f"Orchestration service returned HTTP {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise ProcessorFailure(f"Orchestration request failed: {e}") from e
        finally:
            if owns_client:
                client.close()

        logger.debug(f"[Orchestrator] HTTP {response.status_code} from {self._endpoint}")
        return response.text


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk
