"""Auth handshake and the resulting storage session.

The service uses a single GET against the auth endpoint: credentials travel
in ``X-Auth-User`` / ``X-Auth-Key`` and a successful ``204`` carries the
storage URL and token back in ``X-Storage-Url`` / ``X-Storage-Token``.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from swift_tools.core import get_logger, settings
from swift_tools.core.exceptions import AuthError, ForbiddenError, ProtocolError
from swift_tools.transport import RequestExecutor, RequestSpec

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Storage endpoint and token obtained from the auth handshake."""

    storage_url: str
    token: str

    def __repr__(self) -> str:
        return f"AuthSession(storage_url={self.storage_url!r}, token='***')"

    @property
    def root_url(self) -> str:
        """Storage URL with exactly one trailing slash."""
        return self.storage_url.rstrip("/") + "/"

    @property
    def root_path(self) -> str:
        """Path component of the storage URL, e.g. ``/v1/AUTH_x/``."""
        return urlparse(self.root_url).path or "/"

    def auth_headers(self) -> dict[str, str]:
        return {"X-Auth-Token": self.token}


def authenticate(
    user: str,
    key: str,
    timeout_ms: Optional[int] = None,
    auth_url: Optional[str] = None,
    executor: Optional[RequestExecutor] = None,
) -> AuthSession:
    """Authenticate a storage account.

    Args:
        user: Account user name
        key: Account storage key
        timeout_ms: Request timeout in milliseconds
        auth_url: Auth endpoint, defaults to ``settings.auth_url``
        executor: Executor to send through, a new one if omitted

    Returns:
        AuthSession holding the storage URL and token

    Raises:
        ForbiddenError: If the endpoint answers 403
        AuthError: If the endpoint answers anything other than 204
        ProtocolError: If a 204 lacks the storage URL or token header
        TransportError: If the endpoint cannot be reached
    """
    auth_url = auth_url or settings.auth_url
    executor = executor or RequestExecutor()
    logger.info("Authenticating storage account", user=user, auth_url=auth_url)

    response = executor.send(
        RequestSpec(
            method="GET",
            url=auth_url,
            headers={
                "Host": urlparse(auth_url).netloc,
                "X-Auth-User": user,
                "X-Auth-Key": key,
            },
            timeout_ms=timeout_ms,
        )
    )

    if response.status_code == 403:
        logger.warning("Authentication forbidden", user=user)
        raise ForbiddenError(user)
    if response.status_code != 204:
        logger.warning("Authentication failed", user=user, status=response.status_code)
        raise AuthError(response.status_code)

    storage_url = response.header("x-storage-url")
    token = response.header("x-storage-token")
    if not storage_url or not token:
        raise ProtocolError(
            "Auth response is missing X-Storage-Url or X-Storage-Token"
        )

    logger.info("Storage account authenticated", user=user, storage_url=storage_url)
    return AuthSession(storage_url=storage_url, token=token)
