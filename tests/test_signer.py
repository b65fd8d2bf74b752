"""Unit tests for signed download link generation.

Signing is local (HMAC over the account key), so these tests use the real
Azure Storage SDK with a fake account and never touch the network.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit

import pytest

from blob_notifier.notifications.models import NotificationError
from blob_notifier.storage.signer import (
    CLOCK_SKEW_ALLOWANCE,
    LINK_VALIDITY,
    SAS_VERSION,
    BlobLinkSigner,
    LinkSigningError,
)
from tests.helpers import TEST_ACCOUNT_NAME, TEST_CONNECTION_STRING

FIXED_NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)
SAS_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_sas_time(value: str) -> datetime:
    return datetime.strptime(value, SAS_TIME_FORMAT).replace(tzinfo=timezone.utc)


@pytest.fixture
def signer():
    """Signer with a fixed clock."""
    return BlobLinkSigner(TEST_CONNECTION_STRING, clock=lambda: FIXED_NOW)


def split_url(url):
    parts = urlsplit(url)
    base = f"{parts.scheme}://{parts.netloc}{parts.path}"
    return base, parse_qs(parts.query)


def test_constants_match_policy():
    """Test the published validity window and version."""
    assert LINK_VALIDITY == timedelta(hours=1)
    assert CLOCK_SKEW_ALLOWANCE == timedelta(minutes=5)
    assert SAS_VERSION == "2022-11-02"


def test_url_contains_blob_base_path(signer):
    """Test that the link points at the blob itself."""
    url = signer.sign("c", "b.txt")
    base, _ = split_url(url)

    assert base == f"https://{TEST_ACCOUNT_NAME}.blob.core.windows.net/c/b.txt"


def test_sas_parameters(signer):
    """Test read-only, https-only, blob-scoped SAS with the pinned version."""
    _, params = split_url(signer.sign("c", "b.txt"))

    assert params["sv"] == [SAS_VERSION]
    assert params["sp"] == ["r"]
    assert params["spr"] == ["https"]
    assert params["sr"] == ["b"]
    assert "sig" in params


def test_validity_window(signer):
    """Test start is five minutes before issuance and expiry one hour after."""
    _, params = split_url(signer.sign("c", "b.txt"))

    assert parse_sas_time(params["st"][0]) == FIXED_NOW - timedelta(minutes=5)
    assert parse_sas_time(params["se"][0]) == FIXED_NOW + timedelta(hours=1)


def test_validity_window_with_real_clock():
    """Test the window against the wall clock within execution time."""
    signer = BlobLinkSigner(TEST_CONNECTION_STRING)

    before = datetime.now(timezone.utc).replace(microsecond=0)
    _, params = split_url(signer.sign("c", "b.txt"))
    after = datetime.now(timezone.utc)

    start = parse_sas_time(params["st"][0])
    expiry = parse_sas_time(params["se"][0])

    assert before - timedelta(minutes=5) <= start <= after - timedelta(minutes=5)
    assert before + timedelta(hours=1) <= expiry <= after + timedelta(hours=1)


def test_signature_is_deterministic(signer):
    """Test that the same inputs and time produce the same link."""
    assert signer.sign("c", "b.txt") == signer.sign("c", "b.txt")


def test_signature_scoped_to_blob(signer):
    """Test that different blobs get different signatures."""
    _, first = split_url(signer.sign("c", "a.txt"))
    _, second = split_url(signer.sign("c", "b.txt"))

    assert first["sig"] != second["sig"]


def test_blob_name_is_url_quoted(signer):
    """Test blob names with spaces and virtual directories."""
    base, _ = split_url(signer.sign("c", "reports/q3 summary.pdf"))

    assert base.endswith("/c/reports/q3%20summary.pdf")


def test_malformed_connection_string_raises_signing_error():
    """Test that an unusable connection string becomes LinkSigningError."""
    signer = BlobLinkSigner("ValidConnectionString")

    with pytest.raises(LinkSigningError) as exc_info:
        signer.sign("c", "b.txt")

    assert exc_info.value.kind == "signing"
    assert isinstance(exc_info.value, NotificationError)
    assert exc_info.value.__cause__ is not None


def test_sdk_error_is_wrapped():
    """Test that any SDK exception is wrapped with its message."""
    factory = Mock(side_effect=ValueError("account information unavailable"))
    signer = BlobLinkSigner(TEST_CONNECTION_STRING, service_factory=factory)

    with pytest.raises(LinkSigningError) as exc_info:
        signer.sign("c", "b.txt")

    factory.assert_called_once_with(TEST_CONNECTION_STRING)
    assert "account information unavailable" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_connection_string_without_account_key():
    """Test that a credential without an account key cannot sign."""
    service = Mock()
    service.credential = None
    signer = BlobLinkSigner(TEST_CONNECTION_STRING, service_factory=Mock(return_value=service))

    with pytest.raises(LinkSigningError) as exc_info:
        signer.sign("c", "b.txt")

    assert "AccountKey" in str(exc_info.value)
