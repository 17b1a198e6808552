"""Account authentication against the storage auth endpoint."""

from .session import AuthSession, authenticate

__all__ = ["AuthSession", "authenticate"]
