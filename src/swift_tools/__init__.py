"""A client library for Swift-compatible object storage.

This package wraps the storage REST protocol: account authentication,
container management, object upload/download/metadata/delete and signed
temporary URLs. Every call is a single synchronous request.

Key Features:
    - Auth handshake yielding storage URL and token
    - Account and container clients sharing one executor
    - Header based metadata, directory markers and symlinks
    - HMAC-SHA1 temp URL generation
    - CLI interface

Recommended Usage:
    Use the unified interface from this module for most operations:

    >>> from swift_tools import SwiftStorageConfig, connect
    >>> client = connect(SwiftStorageConfig(user="12345", key="secret"))
    >>> container = client.container("photos")
    >>> container.put_file("/tmp/cat.jpg")

Advanced Usage:
    Build the pieces yourself:

    >>> from swift_tools.transport import RequestExecutor
    >>> from swift_tools.auth import authenticate
    >>> from swift_tools.objectstorage import AccountClient
"""

__version__ = "0.1.0"

from .auth import AuthSession, authenticate
from .core.exceptions import (
    AuthError,
    ForbiddenError,
    ProtocolError,
    StorageError,
    SwiftToolsError,
    TransportError,
    ValidationError,
)
from .objectstorage import (
    AccountClient,
    ContainerClient,
    ContainerDescriptor,
    build_temp_url,
    sign,
)
from .schemas import SwiftStorageConfig
from .transport import RequestExecutor, RequestSpec, ResponseEnvelope, parse_response

# Unified interface (recommended)
from .unified import StorageClient, connect

__all__ = [
    # Configuration
    "SwiftStorageConfig",
    # Unified interface
    "StorageClient",
    "connect",
    # Clients
    "AuthSession",
    "authenticate",
    "AccountClient",
    "ContainerClient",
    "ContainerDescriptor",
    "build_temp_url",
    "sign",
    # Transport
    "RequestExecutor",
    "RequestSpec",
    "ResponseEnvelope",
    "parse_response",
    # Errors
    "SwiftToolsError",
    "ValidationError",
    "TransportError",
    "ProtocolError",
    "AuthError",
    "ForbiddenError",
    "StorageError",
]
