"""Azure Blob Storage helpers."""

from .signer import (
    CLOCK_SKEW_ALLOWANCE,
    LINK_VALIDITY,
    SAS_VERSION,
    BlobLinkSigner,
    LinkSigningError,
)

__all__ = [
    "BlobLinkSigner",
    "LinkSigningError",
    "SAS_VERSION",
    "LINK_VALIDITY",
    "CLOCK_SKEW_ALLOWANCE",
]
