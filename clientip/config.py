# Application Configuration
"""
Configuration module for the client IP service.
Defines the override header list and server/logging settings.
"""

import os
from typing import List


def _parse_header_list(raw: str) -> List[str]:
    """
    Split a comma-separated list of header names.

    Args:
        raw: Value such as "CF-Connecting-IP, X-Real-IP"

    Returns:
        Header names in the given order, blanks dropped
    """
    return [name.strip() for name in raw.split(",") if name.strip()]


class Config:
    """Application configuration with environment variable support."""

    # Header Resolution
    # Headers set by *your* reverse proxy, checked before the built-in list.
    # Only list headers the proxy in front of this service overwrites.
    CLIENT_IP_HEADERS: List[str] = _parse_header_list(os.getenv("CLIENT_IP_HEADERS", ""))

    # Server
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


config = Config()
