"""Domain models for upload events.

An UploadEvent is created per blob trigger invocation, read by the handler
and discarded once the handler returns.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

RECIPIENT_METADATA_KEY = "email"


def split_blob_path(path: str) -> Tuple[str, str]:
    """Split a trigger path into container and blob name.

    Only the first '/' separates the container; the blob name keeps any
    virtual directories.

    Args:
        path: Trigger path such as "uploads/reports/q3.pdf"

    Returns:
        Tuple of (container_name, blob_name)

    Raises:
        ValueError: If either part is missing
    """
    container, sep, blob_name = (path or "").strip().strip("/").partition("/")
    if not sep or not container or not blob_name:
        raise ValueError(f"Blob path must look like '<container>/<blob>', got '{path}'")
    return container, blob_name


class UploadEvent(BaseModel):
    """A single object uploaded to the watched container."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    blob_name: str = Field(..., description="Object name within the container")
    container_name: str = Field(..., description="Container the object was uploaded to")
    metadata: Dict[str, str] = Field(
        default_factory=dict, description="Metadata attached to the blob at upload time"
    )
    blob_path: Optional[str] = Field(None, description="Raw trigger path from the runtime")
    content: Optional[Any] = Field(
        None, exclude=True, repr=False, description="Blob content stream (never read)"
    )

    @field_validator("blob_name", "container_name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from name fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v: Any) -> Any:
        """Treat missing metadata as an empty mapping."""
        return {} if v is None else dict(v)

    @property
    def recipient(self) -> Optional[str]:
        """Address requested in the blob metadata, if any."""
        return self.metadata.get(RECIPIENT_METADATA_KEY)
