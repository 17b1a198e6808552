"""Object storage operations for Swift-compatible services."""

from .account import AccountClient
from .base import ContainerDescriptor
from .container import ContainerClient
from .tempurl import TempURLSignature, build_temp_url, sign

__all__ = [
    "AccountClient",
    "ContainerClient",
    "ContainerDescriptor",
    "TempURLSignature",
    "build_temp_url",
    "sign",
]
