import os, logging
from functools import partial

import azure.functions as func
from azure.storage.blob import BlobServiceClient

from fileprocessor import Dispatcher, Settings
from fileprocessor.settings import BLOB_TRIGGER_CONTAINER
from fileprocessor.orchestrator import HttpOrchestrationService
from fileprocessor.triggers import handle_blob, handle_blob_created

# 1) Functions app (v2 programming model)
app = func.FunctionApp()

# Settings are read once per worker process
settings = Settings.from_env()

dispatcher = Dispatcher(
    api_key=settings.api_key,
    processor_factory=partial(
        HttpOrchestrationService,
        endpoint=settings.endpoint,
        timeout=settings.timeout,
    ),
    timeout=settings.timeout,
)

# Blob client for Event Grid notifications, which carry no content
blob_service_client = BlobServiceClient.from_connection_string(
    os.environ["AzureWebJobsStorage"]
)


# --- 2) Blob trigger ---
@app.function_name(name="fileprocessor")
@app.blob_trigger(arg_name="myblob", path=f"{BLOB_TRIGGER_CONTAINER}/{{name}}", connection="AzureWebJobsStorage")
def fileprocessor(myblob: func.InputStream):
    logging.info("Blob trigger function processed a request.")
    handle_blob(dispatcher, myblob, BLOB_TRIGGER_CONTAINER)


# --- 3) Event Grid trigger (BlobCreated), for EVENT_GRID_CONTAINER only ---
@app.function_name(name="EventGridStart")
@app.event_grid_trigger(arg_name="event")
def event_grid_start(event: func.EventGridEvent):
    logging.info(f"[EventGridStart] Event {event.id} ({event.event_type})")
    handle_blob_created(
        dispatcher, event, blob_service_client, settings.event_grid_container
    )
