"""Process-wide security state.

:data:`PROCESS_SECURITY_STATE` is shared by every component in the
process.  Writes are last-writer-wins and unsynchronised: when several
applications share one interpreter, whichever configures the state last
determines the login configuration and policy for all of them.  Hosts
running more than one application must configure the state once,
centrally, instead of letting each application install its own.

The state is always passed explicitly to
:class:`~container_authz.security.configurator.GlobalSecurityConfigurator`
so that every call site that touches it is visible.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

LOGIN_CONFIGURATION_PROVIDER = "login.configuration.provider"
"""Security property naming the login configuration implementation."""

POLICY_PROVIDER = "policy.provider"
"""Security property naming the authorization policy implementation."""

DEFAULT_LOGIN_CONFIGURATION_PROVIDER = (
    "container_authz.security.providers:LoginConfigFile"
)
DEFAULT_POLICY_PROVIDER = "container_authz.security.providers:PolicyFile"

ENV_LOGIN_CONFIGURATION_PROVIDER = "CONTAINER_AUTHZ_LOGIN_CONFIGURATION_PROVIDER"
ENV_POLICY_PROVIDER = "CONTAINER_AUTHZ_POLICY_PROVIDER"
ENV_SECURITY_POLICY = "CONTAINER_AUTHZ_SECURITY_POLICY"


@dataclass
class GlobalSecurityState:
    """Installed security providers and their settings.

    Attributes
    ----------
    security_properties:
        Provider overrides keyed by :data:`LOGIN_CONFIGURATION_PROVIDER`
        and :data:`POLICY_PROVIDER`.
    login_config_locator:
        Locator of the login configuration file currently published.
    login_configuration:
        The installed login configuration provider instance.
    policy_locator:
        Locator of the security policy file currently published.
    policy:
        The installed authorization policy provider instance.
    """

    security_properties: dict[str, str] = field(default_factory=dict)
    login_config_locator: str | None = None
    login_configuration: Any = None
    policy_locator: str | None = None
    policy: Any = None

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None
    ) -> GlobalSecurityState:
        """Seed a state from ``CONTAINER_AUTHZ_*`` environment variables."""
        env = os.environ if environ is None else environ
        properties: dict[str, str] = {}
        if env.get(ENV_LOGIN_CONFIGURATION_PROVIDER):
            properties[LOGIN_CONFIGURATION_PROVIDER] = env[
                ENV_LOGIN_CONFIGURATION_PROVIDER
            ]
        if env.get(ENV_POLICY_PROVIDER):
            properties[POLICY_PROVIDER] = env[ENV_POLICY_PROVIDER]
        return cls(
            security_properties=properties,
            policy_locator=env.get(ENV_SECURITY_POLICY) or None,
        )


PROCESS_SECURITY_STATE = GlobalSecurityState.from_environ()
"""The state shared by the whole process."""
