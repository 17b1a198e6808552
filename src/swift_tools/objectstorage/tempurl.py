"""Temporary URL signing.

A temp URL grants unauthenticated, time-limited access to one object. The
server recomputes the HMAC over the same canonical string and compares, so
the string below must match byte for byte::

    <METHOD>\\n<expires>\\n<full path>

The signed path is the full URL path: the storage URL path (``/v1/AUTH_x/``)
followed by the container and object. Signing relative to the storage root
is not supported.
"""

import hmac
from dataclasses import dataclass
from hashlib import sha1
from typing import Optional
from urllib.parse import quote_plus, urlparse


@dataclass(frozen=True)
class TempURLSignature:
    """Signature and expiry of a temp URL."""

    signature: str
    expires_at: int


def signing_string(
    method: str, container_path: str, object_path: str, expires_at: int
) -> str:
    return f"{method.upper()}\n{int(expires_at)}\n{container_path}{object_path}"


def sign(
    key: str, method: str, container_path: str, object_path: str, expires_at: int
) -> str:
    """Return the lowercase hex HMAC-SHA1 signature for a temp URL."""
    body = signing_string(method, container_path, object_path, expires_at)
    return hmac.new(key.encode("utf-8"), body.encode("utf-8"), sha1).hexdigest()


def verify(
    key: str, method: str, path: str, expires_at: int, signature: str
) -> bool:
    """Check a signature against the canonical string for ``path``."""
    expected = sign(key, method, path, "", expires_at)
    return hmac.compare_digest(expected, signature)


def build_temp_url(
    storage_url: str,
    key: str,
    object_path: str,
    expires_at: int,
    filename: Optional[str] = None,
    method: str = "GET",
) -> str:
    """Build a signed temp URL for an object under ``storage_url``.

    Args:
        storage_url: Base URL whose path prefixes ``object_path``
        key: Temp URL key configured on the account
        object_path: Path relative to ``storage_url``
        expires_at: Expiry as a unix timestamp
        filename: Download name override
        method: HTTP method the URL is valid for

    Returns:
        Fully qualified signed URL
    """
    parsed = urlparse(storage_url)
    container_path = parsed.path or "/"
    expires_at = int(expires_at)
    signature = TempURLSignature(
        signature=sign(key, method, container_path, object_path, expires_at),
        expires_at=expires_at,
    )

    url = (
        f"{parsed.scheme}://{parsed.netloc}{container_path}{object_path}"
        f"?temp_url_sig={signature.signature}&temp_url_expires={signature.expires_at}"
    )
    if filename is not None:
        url += "&filename=" + quote_plus(filename)
    return url
