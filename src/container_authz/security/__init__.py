"""Process-wide security configuration.

* **GlobalSecurityConfigurator** -- queries and replaces the installed
  login configuration and authorization policy providers.
* **GlobalSecurityState** -- the explicit, last-writer-wins state those
  providers live in; :data:`PROCESS_SECURITY_STATE` is the shared one.
* **ExecutionContext** -- the capabilities a caller holds.
"""
from __future__ import annotations

from container_authz.security.configurator import GlobalSecurityConfigurator
from container_authz.security.context import ExecutionContext, SecurityPermission
from container_authz.security.providers import (
    LoginConfigFile,
    PolicyFile,
    load_provider,
)
from container_authz.security.state import (
    PROCESS_SECURITY_STATE,
    GlobalSecurityState,
)

__all__ = [
    "PROCESS_SECURITY_STATE",
    "ExecutionContext",
    "GlobalSecurityConfigurator",
    "GlobalSecurityState",
    "LoginConfigFile",
    "PolicyFile",
    "SecurityPermission",
    "load_provider",
]
