"""Adapters from Functions trigger payloads to the dispatcher."""

import io
import logging
from typing import Optional

import azure.functions as func
from azure.storage.blob import BlobServiceClient

from .dispatcher import Dispatcher, IncomingFile
from .events import parse_blob_created

logger = logging.getLogger(__name__)


def incoming_file_from_blob(blob: func.InputStream, container: str) -> IncomingFile:
    # InputStream.name is "<container>/<blob path>"
    name = blob.name or ""
    prefix = f"{container}/"
    if name.startswith(prefix):
        name = name[len(prefix):]
    return IncomingFile(name=name, content=blob)


def handle_blob(dispatcher: Dispatcher, blob: func.InputStream, container: str) -> str:
    logger.info(f"[BlobTrigger] Blob received: {blob.name} ({blob.length} bytes)")
    return dispatcher.handle(incoming_file_from_blob(blob, container))


def handle_blob_created(
    dispatcher: Dispatcher,
    event: func.EventGridEvent,
    blob_service: BlobServiceClient,
    container: Optional[str],
) -> Optional[str]:
    """Download the blob named by an Event Grid notification and dispatch it.

    Events for other containers are skipped, and all events are skipped
    when no container is assigned to this route. The downloaded stream is
    owned here and closed once the dispatcher returns.
    """
    if container is None:
        logger.info(f"[EventGrid] No container assigned, ignoring event {event.id}")
        return None

    created = parse_blob_created(event)
    if created is None:
        return None
    if created.container != container:
        logger.info(
            f"[EventGrid] Skipping blob from container={created.container}, expected {container}"
        )
        return None

    logger.info(
        f"[EventGrid] New blob: container={created.container}, name={created.blob_name}"
    )
    blob_client = blob_service.get_blob_client(
        container=created.container, blob=created.blob_name
    )
    try:
        raw = blob_client.download_blob().readall()
    except Exception:
        logger.exception(f"[EventGrid] Download failed for {created.url or created.blob_name}")
        raise
    logger.info(f"[EventGrid] Downloaded {len(raw)} bytes")

    with io.BytesIO(raw) as stream:
        return dispatcher.handle(IncomingFile(name=created.blob_name, content=stream))
