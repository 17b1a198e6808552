"""Configuration management for swift-tools."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "swift-tools"
    otel_exporter: Literal["console", "otlp"] = "console"
    otel_exporter_endpoint: str = "http://localhost:4317"

    auth_url: str = "https://auth.selcdn.ru/"
    timeout_ms: Optional[int] = None
    response_format: Literal["", "json", "xml"] = ""
    verify_tls: bool = True

    model_config = {
        "env_prefix": "SWIFT_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
