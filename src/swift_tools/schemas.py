"""Connection configuration schemas for swift-tools."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core import settings


class SwiftStorageConfig(BaseModel):
    """Configuration for a Swift storage account connection."""

    model_config = ConfigDict(extra="forbid")

    user: str = Field(..., description="Storage account user")
    key: str = Field(..., description="Storage account key")
    auth_url: str = Field(
        default_factory=lambda: settings.auth_url, description="Auth endpoint URL"
    )
    response_format: Literal["", "json", "xml"] = Field(
        default_factory=lambda: settings.response_format,
        description="Default listing format: '' (plain), 'json' or 'xml'",
    )
    timeout_ms: Optional[int] = Field(
        default_factory=lambda: settings.timeout_ms,
        gt=0,
        description="Request timeout in milliseconds",
    )
    verify_tls: bool = Field(
        default_factory=lambda: settings.verify_tls,
        description="Verify server TLS certificates",
    )
