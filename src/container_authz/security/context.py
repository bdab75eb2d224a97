"""Execution contexts and capability checks.

Reading or changing the global security state requires a named
capability.  An unrestricted context holds every capability; a
restricted context holds only the permissions it was granted.
"""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from container_authz.core.errors import PermissionDenied


class SecurityPermission(enum.StrEnum):
    """Capabilities guarding the global security state."""

    GET_LOGIN_CONFIGURATION = "getLoginConfiguration"
    SET_LOGIN_CONFIGURATION = "setLoginConfiguration"
    WRITE_LOGIN_CONFIG_PROPERTY = "writeLoginConfigProperty"
    GET_POLICY = "getPolicy"
    SET_POLICY = "setPolicy"
    READ_POLICY_PROPERTY = "readPolicyProperty"
    WRITE_POLICY_PROPERTY = "writePolicyProperty"
    READ_SECURITY_PROPERTY = "readSecurityProperty"


class ExecutionContext(BaseModel):
    """The capabilities held by the code calling into the configurator."""

    model_config = ConfigDict(frozen=True)

    restricted: bool = Field(
        default=False,
        description="When False, every permission is implicitly granted.",
    )
    granted: frozenset[SecurityPermission] = Field(
        default_factory=frozenset,
        description="Permissions held by a restricted context.",
    )

    @classmethod
    def unrestricted(cls) -> ExecutionContext:
        return cls()

    @classmethod
    def restricted_to(cls, *permissions: SecurityPermission) -> ExecutionContext:
        return cls(restricted=True, granted=frozenset(permissions))

    def allows(self, permission: SecurityPermission) -> bool:
        return not self.restricted or permission in self.granted

    def require(self, *permissions: SecurityPermission) -> None:
        """Raise :class:`PermissionDenied` unless every permission is held."""
        missing = [p for p in permissions if not self.allows(p)]
        if missing:
            raise PermissionDenied(
                f"Execution context lacks permission: {', '.join(missing)}",
                details={"missing": [str(p) for p in missing]},
            )
