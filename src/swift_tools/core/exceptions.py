"""Exception hierarchy for swift-tools."""

from typing import Optional


class SwiftToolsError(Exception):
    """Base exception for all swift-tools errors."""

    pass


class ValidationError(SwiftToolsError):
    """Raised when local input fails validation."""

    pass


class TransportError(SwiftToolsError):
    """Raised when a request cannot be completed at the network level.

    Covers DNS failures, refused connections, TLS errors and timeouts.
    The client never retries; that decision belongs to the caller.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ProtocolError(SwiftToolsError):
    """Raised when a response does not honour the protocol contract."""

    pass


class AuthError(SwiftToolsError):
    """Raised when the auth handshake does not return 204."""

    def __init__(self, code: int, message: Optional[str] = None):
        super().__init__(message or f"Authentication failed with HTTP {code}")
        self.code = code


class ForbiddenError(AuthError):
    """Raised when the auth endpoint rejects the user with 403."""

    def __init__(self, user: str):
        super().__init__(403, f"Forbidden for user '{user}'")
        self.user = user


class StorageError(SwiftToolsError):
    """Raised when an operation receives an unexpected status code."""

    def __init__(self, code: int, operation: str):
        super().__init__(f"{operation} failed with HTTP {code}")
        self.code = code
        self.operation = operation
