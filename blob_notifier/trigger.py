"""Adapter between the Azure Functions blob trigger and the handler."""

from typing import Any, Optional

from blob_notifier.domain.models import split_blob_path
from blob_notifier.handler import NotificationHandler
from blob_notifier.logging.context import log_context


def handle_input_stream(
    handler: NotificationHandler,
    blob: Any,
    invocation_id: Optional[str] = None,
) -> None:
    """Forward a func.InputStream to the handler.

    The stream's ``name`` is the trigger path ("<container>/<blob>"); only
    the blob part is passed on, the container comes from configuration.

    Args:
        handler: Ready notification handler
        blob: azure.functions.InputStream (or anything with name/metadata)
        invocation_id: Functions invocation id, added to every log line
    """
    blob_trigger = blob.name
    try:
        _, blob_name = split_blob_path(blob_trigger)
    except ValueError:
        # Some hosts deliver the bare blob name
        blob_name = blob_trigger

    metadata = getattr(blob, "metadata", None) or {}

    with log_context(invocation_id=invocation_id):
        handler.handle(blob, blob_name, metadata, blob_trigger=blob_trigger)
