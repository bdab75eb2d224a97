"""Access-control error-code hierarchy.

Hierarchy
---------
::

    AccessControlError
    +-- ConfigurationFailure    (AC-E1xx)  always surfaced to the caller
    |   +-- InvalidArgument
    |   +-- ConfigurationError
    +-- PermissionDenied        (AC-E200)  never swallowed
    +-- DescriptorError         (AC-E3xx)  resolver fails open
        +-- DescriptorUnavailable
        +-- MalformedDescriptor

Usage
-----
Raise concrete subclasses directly::

    raise InvalidArgument("Locator for the login configuration cannot be empty")

Catch by category::

    try:
        ...
    except DescriptorError:
        # handles DescriptorUnavailable and MalformedDescriptor
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class AccessControlError(Exception):
    """Base exception for all access-control errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"AC-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the operator.
    """

    code: str = "AC-E000"
    message: str = "Unknown access-control error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error for structured logs and admin consoles."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class ConfigurationFailure(AccessControlError):
    """AC-E1xx -- Global security configuration errors."""

    code = "AC-E1XX"


class DescriptorError(AccessControlError):
    """AC-E3xx -- Deployment descriptor errors."""

    code = "AC-E3XX"


# ===================================================================
# AC-E1xx  Configuration Errors
# ===================================================================

class InvalidArgument(ConfigurationFailure):
    """AC-E100 -- A setter received a missing or empty argument."""

    code = "AC-E100"
    message = "Invalid argument"
    resolution = "Supply a non-empty locator for the configuration resource."


class ConfigurationError(ConfigurationFailure):
    """AC-E101 -- A security provider could not be resolved or instantiated."""

    code = "AC-E101"
    message = "Security provider could not be installed"
    resolution = (
        "Check the provider override property and make sure the named "
        "implementation is importable and accepts a locator argument."
    )


# ===================================================================
# AC-E200  Permission Errors
# ===================================================================

class PermissionDenied(AccessControlError):
    """AC-E200 -- The execution context lacks a required capability."""

    code = "AC-E200"
    message = "Execution context lacks the required security capability"
    resolution = (
        "Grant the named permission to the execution context that "
        "queries or mutates the global security state."
    )


# ===================================================================
# AC-E3xx  Descriptor Errors
# ===================================================================

class DescriptorUnavailable(DescriptorError):
    """AC-E300 -- The deployment descriptor could not be located or fetched."""

    code = "AC-E300"
    message = "Deployment descriptor could not be located"
    resolution = (
        "Provide WEB-INF/web.xml through the host resource resolver or "
        "under the configured base directory."
    )


class MalformedDescriptor(DescriptorError):
    """AC-E301 -- The deployment descriptor is not a valid web-app document."""

    code = "AC-E301"
    message = "Malformed XML in the deployment descriptor"
    resolution = "Fix the deployment descriptor and reload the resolver."


# ===================================================================
# Code lookup
# ===================================================================

_CODE_MAP: dict[str, type[AccessControlError]] = {
    cls.code: cls
    for cls in [
        InvalidArgument,
        ConfigurationError,
        PermissionDenied,
        DescriptorUnavailable,
        MalformedDescriptor,
    ]
}


def error_from_code(code: str, message: str | None = None) -> AccessControlError:
    """Instantiate the correct exception class for an error code.

    Raises
    ------
    KeyError
        If *code* is not a recognised error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
