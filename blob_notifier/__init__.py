"""Email a signed download link when a file lands in blob storage."""

__version__ = "0.1.0"
