"""Domain models for the blob upload notifier."""

from .models import RECIPIENT_METADATA_KEY, UploadEvent, split_blob_path

__all__ = ["RECIPIENT_METADATA_KEY", "UploadEvent", "split_blob_path"]
