"""Connected storage client built from a ``SwiftStorageConfig``."""

from typing import Optional

from swift_tools.auth import AuthSession, authenticate
from swift_tools.core import get_logger
from swift_tools.objectstorage import AccountClient, ContainerClient
from swift_tools.schemas import SwiftStorageConfig
from swift_tools.transport import RequestExecutor

logger = get_logger(__name__)


class StorageClient:
    """Authenticated account plus factory for container clients.

    One executor and one auth session are shared by reference between the
    account client and every container client handed out.
    """

    def __init__(
        self,
        config: SwiftStorageConfig,
        session: AuthSession,
        executor: RequestExecutor,
    ):
        self.config = config
        self.session = session
        self.executor = executor
        self.account = AccountClient(
            executor,
            session,
            response_format=config.response_format,
            timeout_ms=config.timeout_ms,
        )

    def container(self, name: str, fetch: bool = True) -> ContainerClient:
        """Return a client for ``name``.

        With ``fetch`` the container is HEADed first, so a missing container
        fails here rather than on first use.
        """
        if fetch:
            return self.account.open_container(name)
        return ContainerClient(
            self.executor,
            self.session,
            name,
            response_format=self.config.response_format,
            timeout_ms=self.config.timeout_ms,
        )

    def close(self) -> None:
        self.executor.close()

    def __enter__(self) -> "StorageClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def connect(
    config: SwiftStorageConfig, executor: Optional[RequestExecutor] = None
) -> StorageClient:
    """Authenticate and return a ready ``StorageClient``.

    An executor created here is closed again if authentication fails; one
    passed in by the caller is left open.
    """
    owns_executor = executor is None
    if owns_executor:
        executor = RequestExecutor(
            timeout_ms=config.timeout_ms, verify_tls=config.verify_tls
        )
    try:
        session = authenticate(
            config.user,
            config.key,
            timeout_ms=config.timeout_ms,
            auth_url=config.auth_url,
            executor=executor,
        )
    except Exception:
        if owns_executor:
            executor.close()
        raise
    logger.info("Storage client connected", user=config.user)
    return StorageClient(config, session, executor)
