"""container-authz -- declarative access-control resolution.

Decides from a web application's deployment descriptor whether the
container protects a resource, and bootstraps the process-wide login
configuration and authorization policy providers.

Components
----------
1. Constraint resolution (:mod:`container_authz.resolver`)
2. Descriptor loading (:mod:`container_authz.descriptor`)
3. Global security configuration (:mod:`container_authz.security`)
"""
from __future__ import annotations

__version__ = "1.0.0a1"

# ---------------------------------------------------------------------------
# Core types, errors, config, interfaces
# ---------------------------------------------------------------------------
from container_authz.core.config import AuthzConfig
from container_authz.core.errors import (
    AccessControlError,
    ConfigurationError,
    ConfigurationFailure,
    DescriptorError,
    DescriptorUnavailable,
    InvalidArgument,
    MalformedDescriptor,
    PermissionDenied,
)
from container_authz.core.interfaces import (
    HostRequest,
    PrincipalSession,
    ResourceResolver,
)
from container_authz.core.types import Constraint, ConstraintIndex, Role

# ---------------------------------------------------------------------------
# Descriptor loading and resolution
# ---------------------------------------------------------------------------
from container_authz.descriptor import DescriptorSource, parse_descriptor
from container_authz.resolver import ConstraintResolver, InitializationResult

# ---------------------------------------------------------------------------
# Global security configuration
# ---------------------------------------------------------------------------
from container_authz.security import (
    PROCESS_SECURITY_STATE,
    ExecutionContext,
    GlobalSecurityConfigurator,
    GlobalSecurityState,
    SecurityPermission,
)

__all__ = [
    "__version__",
    # Core
    "AuthzConfig",
    "Constraint",
    "ConstraintIndex",
    "Role",
    "HostRequest",
    "PrincipalSession",
    "ResourceResolver",
    # Errors
    "AccessControlError",
    "ConfigurationFailure",
    "ConfigurationError",
    "DescriptorError",
    "DescriptorUnavailable",
    "InvalidArgument",
    "MalformedDescriptor",
    "PermissionDenied",
    # Resolution
    "ConstraintResolver",
    "DescriptorSource",
    "InitializationResult",
    "parse_descriptor",
    # Security configuration
    "PROCESS_SECURITY_STATE",
    "ExecutionContext",
    "GlobalSecurityConfigurator",
    "GlobalSecurityState",
    "SecurityPermission",
]
