"""Tests for the access-control error hierarchy."""
from __future__ import annotations

import pytest

from container_authz.core.errors import (
    AccessControlError,
    ConfigurationError,
    ConfigurationFailure,
    DescriptorError,
    DescriptorUnavailable,
    InvalidArgument,
    MalformedDescriptor,
    PermissionDenied,
    error_from_code,
)


class TestHierarchy:
    """Category membership drives the fail-open / fail-closed split."""

    @pytest.mark.parametrize("cls", [InvalidArgument, ConfigurationError])
    def test_configuration_failures(self, cls: type[AccessControlError]) -> None:
        assert issubclass(cls, ConfigurationFailure)
        assert not issubclass(cls, DescriptorError)

    @pytest.mark.parametrize("cls", [DescriptorUnavailable, MalformedDescriptor])
    def test_descriptor_errors(self, cls: type[AccessControlError]) -> None:
        assert issubclass(cls, DescriptorError)

    def test_permission_denied_is_its_own_category(self) -> None:
        assert not issubclass(PermissionDenied, ConfigurationFailure)
        assert not issubclass(PermissionDenied, DescriptorError)


class TestSerialisation:
    """Tests for to_dict, repr and code lookup."""

    def test_to_dict(self) -> None:
        err = InvalidArgument("Locator cannot be empty", details={"target": "policy"})
        payload = err.to_dict()["error"]
        assert payload["code"] == "AC-E100"
        assert payload["message"] == "Locator cannot be empty"
        assert payload["detail"] == {"target": "policy"}
        assert payload["resolution"]

    def test_default_message(self) -> None:
        assert str(DescriptorUnavailable()) == DescriptorUnavailable.message

    def test_repr(self) -> None:
        assert repr(PermissionDenied("no")) == (
            "PermissionDenied(code='AC-E200', message='no')"
        )

    def test_error_from_code(self) -> None:
        err = error_from_code("AC-E301", "bad root")
        assert isinstance(err, MalformedDescriptor)
        assert err.message == "bad root"

    def test_unknown_code(self) -> None:
        with pytest.raises(KeyError):
            error_from_code("AC-E999")
