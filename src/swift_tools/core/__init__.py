"""Core utilities and shared components for swift-tools."""

from .config import settings
from .exceptions import (
    AuthError,
    ForbiddenError,
    ProtocolError,
    StorageError,
    SwiftToolsError,
    TransportError,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "SwiftToolsError",
    "ValidationError",
    "TransportError",
    "ProtocolError",
    "AuthError",
    "ForbiddenError",
    "StorageError",
    "get_logger",
    "get_tracer",
]
