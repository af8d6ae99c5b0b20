"""
Configuration - Application settings, error taxonomy, and logging setup.
"""

from .errors import (
    ErrorCode,
    NotFoundError,
    SearchCancelledError,
    SiteDocsError,
    StorageError,
)
from .log_setup import configure_logging
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    # Errors
    "ErrorCode",
    "SiteDocsError",
    "SearchCancelledError",
    "StorageError",
    "NotFoundError",
]
