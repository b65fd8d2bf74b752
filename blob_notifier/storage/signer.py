"""Signed download links for uploaded blobs.

Builds a blob-scoped, read-only, https-only shared access signature with
the account key from the storage connection string. The link starts five
minutes in the past to tolerate clock skew between this host and the
storage service, and expires one hour after issuance. There is no
revocation; links simply time out.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from azure.storage.blob import BlobSasPermissions, BlobServiceClient

# generate_blob_sas() always signs with the SDK's own service version; the
# signature class it wraps lets the version be pinned.
from azure.storage.blob._shared_access_signature import BlobSharedAccessSignature

from blob_notifier.notifications.models import NotificationError
from blob_notifier.utils.timestamps import ensure_utc, utc_now

logger = logging.getLogger(__name__)

SAS_VERSION = "2022-11-02"
LINK_VALIDITY = timedelta(hours=1)
CLOCK_SKEW_ALLOWANCE = timedelta(minutes=5)


class LinkSigningError(NotificationError):
    """Raised when a download link cannot be generated for a blob."""

    kind = "signing"


class BlobLinkSigner:
    """Mints time-boxed read-only URLs for blobs in one storage account."""

    def __init__(
        self,
        connection_string: str,
        service_factory: Optional[Callable[[str], Any]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the signer.

        Args:
            connection_string: Storage account connection string with AccountKey
            service_factory: Builds a BlobServiceClient from a connection string
            clock: Returns the current UTC time (for tests)
        """
        self.connection_string = connection_string
        self.service_factory = service_factory or BlobServiceClient.from_connection_string
        self.clock = clock or utc_now

    def sign(self, container_name: str, blob_name: str) -> str:
        """Return the blob URL with a read-only SAS query string appended.

        Args:
            container_name: Container holding the blob
            blob_name: Blob name within the container

        Returns:
            "<blob url>?<sas token>"

        Raises:
            LinkSigningError: If the connection string is unusable or signing fails
        """
        try:
            service = self.service_factory(self.connection_string)
            blob_client = service.get_blob_client(container=container_name, blob=blob_name)
            account_key = _account_key(service)

            now = ensure_utc(self.clock())
            signature = BlobSharedAccessSignature(
                blob_client.account_name, account_key=account_key
            )
            signature.x_ms_version = SAS_VERSION
            token = signature.generate_blob(
                container_name,
                blob_name,
                permission=BlobSasPermissions(read=True),
                start=now - CLOCK_SKEW_ALLOWANCE,
                expiry=now + LINK_VALIDITY,
                protocol="https",
            )
        except LinkSigningError:
            raise
        except Exception as e:
            raise LinkSigningError(f"Failed to generate download link: {e}") from e

        logger.debug(
            f"Signed download link for {container_name}/{blob_name}",
            extra={"event": "link.signed", "expires_at": (now + LINK_VALIDITY).isoformat()},
        )
        return f"{blob_client.url}?{token}"


def _account_key(service: Any) -> str:
    """Extract the shared key the service client was built with."""
    account_key = getattr(getattr(service, "credential", None), "account_key", None)
    if not account_key:
        raise LinkSigningError(
            "Connection string does not include an AccountKey; cannot sign download links"
        )
    return account_key
