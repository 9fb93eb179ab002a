import logging
from dataclasses import dataclass
from typing import Optional

import azure.functions as func

from .errors import InvalidInput

logger = logging.getLogger(__name__)

# Storage APIs that finish writing a new blob
BLOB_CREATED_APIS = {"PutBlob", "PutBlockList", "FlushWithClose"}


@dataclass(frozen=True)
class BlobCreated:
    container: str
    blob_name: str
    url: str
    content_length: int


def parse_blob_created(event: func.EventGridEvent) -> Optional[BlobCreated]:
    """Extract the blob location from a BlobCreated notification.

    Returns None for storage events that are not completed uploads.
    """
    data = event.get_json()
    api = data.get("api")
    if api not in BLOB_CREATED_APIS:
        logger.info(f"[EventGrid] Ignoring event {event.id} with api={api}")
        return None

    # e.g. "/blobServices/default/containers/processed/blobs/2024/invoice.pdf"
    subject = event.subject or ""
    if "/blobs/" not in subject:
        raise InvalidInput(f"Unexpected blob event subject: {subject!r}")

    container_part, blob_name = subject.split("/blobs/", 1)
    if "/containers/" not in container_part:
        raise InvalidInput(f"Unexpected blob event subject: {subject!r}")
    container = container_part.split("/containers/", 1)[1]

    return BlobCreated(
        container=container,
        blob_name=blob_name,
        url=data.get("url", ""),
        content_length=data.get("contentLength", 0),
    )
