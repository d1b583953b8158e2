"""
Configuration via Pydantic BaseSettings. Single source of truth for all env vars.

All fields are overridable at runtime via environment variables.
"""

from typing import Literal

from pydantic_settings import BaseSettings

from src.requestid import DEFAULT_ID_HEADER


class RequestIDConfig(BaseSettings):
    """Request-id pipeline configuration."""

    header: str = DEFAULT_ID_HEADER
    generator: Literal["timestamp", "random"] = "timestamp"
    save_to: Literal["header", "context", "both"] = "header"
    context_key: str = "request_id"
    expose_header: bool = True

    model_config = {"env_prefix": "REQUESTID_"}


class APIConfig(BaseSettings):
    """Server-level configuration."""

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "API_"}


class Settings:
    """Aggregated settings from all config groups."""

    def __init__(self):
        self.request_id = RequestIDConfig()
        self.api = APIConfig()
