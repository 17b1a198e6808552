"""Single entry point wiring authentication and storage clients together."""

from .storage_client import StorageClient, connect

__all__ = ["StorageClient", "connect"]
