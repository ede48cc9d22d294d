"""Tests for custom exception hierarchy."""

import pytest

from techdocs.exceptions import (
    ConfigError,
    ConnectivityError,
    NotFoundError,
    PublishError,
    ReadError,
    StorageError,
    TechDocsError,
    UploadError,
)


def test_techdocs_error_base():
    """Test base TechDocsError."""
    error = TechDocsError("Test error", {"key": "value"})
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == {"key": "value"}


def test_details_default_to_empty_dict():
    assert ConfigError("Config missing").details == {}


def test_publish_errors_are_storage_errors():
    for error_cls in (ReadError, UploadError):
        error = error_cls("publish failed", {"key": "default/Component/foo/index.html"})
        assert isinstance(error, PublishError)
        assert isinstance(error, StorageError)
        assert isinstance(error, TechDocsError)


@pytest.mark.parametrize("error_cls", [ConnectivityError, NotFoundError, PublishError])
def test_storage_error_subclasses(error_cls):
    assert issubclass(error_cls, StorageError)


def test_config_error_is_not_a_storage_error():
    assert issubclass(ConfigError, TechDocsError)
    assert not issubclass(ConfigError, StorageError)
