"""Azure Functions entry point for the blob upload notifier."""

from dotenv import load_dotenv
load_dotenv()

import azure.functions as func

from blob_notifier.handler import NotificationHandler
from blob_notifier.logging import get_logger
from blob_notifier.logging.config import configure_logging
from blob_notifier.trigger import handle_input_stream

logger = get_logger(__name__, component="function_app")

# Configuration errors raise here, during indexing, so the worker never
# registers the trigger and no event is processed with a partial config.
handler = NotificationHandler.from_environment()

configure_logging(
    level=handler.config.log_level,
    format_type=handler.config.log_format,
    environment=handler.config.environment,
    replace_handlers=False,
)

logger.info(
    "Upload notifier ready",
    extra={
        "event": "service.ready",
        "container_name": handler.config.container_name,
        "smtp_host": handler.config.sender_host,
        "smtp_port": handler.config.sender_port,
    },
)

app = func.FunctionApp()


@app.function_name(name="EmailFunction")
@app.blob_trigger(
    arg_name="blob",
    path="%CONTAINER_NAME%/{name}",
    connection="CONNECTION_STRING",
)
def notify_on_upload(blob: func.InputStream, context: func.Context) -> None:
    handle_input_stream(handler, blob, invocation_id=context.invocation_id)
