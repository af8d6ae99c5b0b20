"""Tests for settings, error taxonomy and logging setup."""

import logging

import pytest

from .errors import ErrorCode, NotFoundError, SiteDocsError, StorageError
from .log_setup import configure_logging
from .settings import Settings


def test_settings_defaults() -> None:
    """Test default search settings."""
    settings = Settings(_env_file=None)

    assert settings.search_default_limit == 50
    assert settings.search_history_size == 10
    assert settings.suggestion_limit == 10
    assert settings.content_types == ["pdf", "doc", "docx"]


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test environment variables override defaults case-insensitively."""
    monkeypatch.setenv("SEARCH_HISTORY_SIZE", "3")
    monkeypatch.setenv("content_timeout_seconds", "0.5")

    settings = Settings(_env_file=None)

    assert settings.search_history_size == 3
    assert settings.content_timeout_seconds == 0.5


def test_error_to_dict() -> None:
    """Test errors serialize with code, message and details."""
    error = NotFoundError("Saved filter not found: x", {"name": "x"})

    assert error.to_dict() == {
        "code": "NOT_FOUND",
        "message": "Saved filter not found: x",
        "details": {"name": "x"},
    }
    assert str(error) == "[NOT_FOUND] Saved filter not found: x"


def test_error_subclasses_carry_codes() -> None:
    assert StorageError("locked").code == ErrorCode.STORAGE_READ_FAILED
    assert isinstance(StorageError("locked"), SiteDocsError)
    assert StorageError("locked").details == {}


def test_configure_logging_sets_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG

        configure_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
