# catalog_api/config.py
"""
Settings for the product catalog service.

Values are read from environment variables when a ``Settings`` instance
is created.  Only the listening port is expected to change between
deployments; the other fields exist so tests and local runs can
override them without editing code.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Product API"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    # request and error lines are also appended here when set
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # Shared secret expected after "Bearer " on mutating requests.  This
    # is a placeholder trust check, not a credential system.
    api_token: str = field(default_factory=lambda: os.getenv("API_TOKEN", "secret-token"))


def load_settings() -> Settings:
    return Settings()
