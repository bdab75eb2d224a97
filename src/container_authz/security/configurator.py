"""Global security configurator.

Installs the login configuration provider and the authorization policy
provider into a :class:`~container_authz.security.state.GlobalSecurityState`.
The state passed in is normally
:data:`~container_authz.security.state.PROCESS_SECURITY_STATE`, in which
case every change is visible to the whole process and the last writer
wins.  No locking is attempted.

Unlike descriptor resolution, configuration never fails open: an empty
locator raises :class:`InvalidArgument`, and a provider that cannot be
resolved or instantiated raises :class:`ConfigurationError`.  After a
:class:`ConfigurationError` the previous provider has already been
removed and is not restored.

Usage
-----
::

    from container_authz.security import (
        PROCESS_SECURITY_STATE,
        ExecutionContext,
        GlobalSecurityConfigurator,
    )

    configurator = GlobalSecurityConfigurator(
        PROCESS_SECURITY_STATE, ExecutionContext.unrestricted()
    )
    if not configurator.is_auth_configured():
        configurator.set_auth_configuration("WEB-INF/login.conf")
"""
from __future__ import annotations

import logging
import os
from typing import Any

from container_authz.core.config import AuthzConfig
from container_authz.core.errors import ConfigurationError, InvalidArgument
from container_authz.security.context import ExecutionContext, SecurityPermission
from container_authz.security.providers import load_provider, locator_to_path
from container_authz.security.state import (
    DEFAULT_LOGIN_CONFIGURATION_PROVIDER,
    DEFAULT_POLICY_PROVIDER,
    LOGIN_CONFIGURATION_PROVIDER,
    POLICY_PROVIDER,
    GlobalSecurityState,
)

logger = logging.getLogger(__name__)


class GlobalSecurityConfigurator:
    """Queries and replaces the providers installed in a security state.

    Parameters
    ----------
    state:
        The security state to operate on.
    context:
        Capabilities of the caller; defaults to an unrestricted context.
    config:
        Supplies the keystore file name used by the policy diagnostics.
    """

    def __init__(
        self,
        state: GlobalSecurityState,
        context: ExecutionContext | None = None,
        config: AuthzConfig | None = None,
    ) -> None:
        self._state = state
        self._context = context or ExecutionContext.unrestricted()
        self._config = config or AuthzConfig()

    @property
    def state(self) -> GlobalSecurityState:
        return self._state

    # -- queries ------------------------------------------------------------

    def is_auth_configured(self) -> bool:
        """Return ``True`` if a login configuration is installed.

        Raises
        ------
        PermissionDenied
            If the context may not read the login configuration.
        """
        self._context.require(SecurityPermission.GET_LOGIN_CONFIGURATION)
        return self._state.login_configuration is not None

    def is_policy_configured(self) -> tuple[bool, str | None]:
        """Return whether a security policy locator is set, and the locator.

        When a locator is set, checks that the policy file and the
        keystore next to it exist.  Missing files are logged as warnings
        and never change the result.

        Raises
        ------
        PermissionDenied
            If the context may not read the policy setting.
        """
        self._context.require(SecurityPermission.READ_POLICY_PROPERTY)
        locator = self._state.policy_locator
        if not locator:
            return False, None

        logger.info(
            "Security policy already set to: %s. (Leaving it alone...)", locator
        )
        self._check_policy_companions(locator)
        return True, locator

    def _check_policy_companions(self, locator: str) -> None:
        policy_file = locator_to_path(locator).absolute()
        if not policy_file.exists():
            logger.warning(
                "The security policy points at '%s', but that file does not "
                "seem to exist. Continuing anyway, since this may be specific "
                "to the hosting container.",
                policy_file,
            )

        keystore_name = self._config.keystore_name
        keystore = policy_file.parent / keystore_name
        if not keystore.is_file() or not os.access(keystore, os.R_OK):
            logger.warning(
                "Could not locate the keystore ('%s') in the same directory as "
                "the policy file. Many containers need it there; copy it to %s "
                "if permission checks keep failing.",
                keystore_name,
                policy_file.parent,
            )
        else:
            logger.info(
                "Found '%s' in '%s'. If permission checks fail after an "
                "upgrade, make sure it matches the distributed keystore.",
                keystore_name,
                policy_file.parent,
            )

    # -- mutations ----------------------------------------------------------

    def set_auth_configuration(self, locator: str | os.PathLike[str] | None) -> None:
        """Install a new login configuration read from *locator*.

        The implementation is taken from the
        ``login.configuration.provider`` security property, falling back
        to :class:`~container_authz.security.providers.LoginConfigFile`.

        Raises
        ------
        InvalidArgument
            If *locator* is empty; the state is left untouched.
        PermissionDenied
            If the context may not replace the login configuration.
        ConfigurationError
            If the provider cannot be resolved or instantiated.
        """
        locator = _require_locator(locator, "login configuration")
        self._context.require(
            SecurityPermission.SET_LOGIN_CONFIGURATION,
            SecurityPermission.WRITE_LOGIN_CONFIG_PROPERTY,
        )
        provider = self._provider_name(
            LOGIN_CONFIGURATION_PROVIDER, DEFAULT_LOGIN_CONFIGURATION_PROVIDER
        )

        self._state.login_configuration = None
        self._state.login_config_locator = locator
        self._state.login_configuration = _instantiate(provider, locator)
        logger.info("Login configuration set to %s using %s", locator, provider)

    def set_policy(self, locator: str | os.PathLike[str] | None) -> None:
        """Install a new authorization policy read from *locator*.

        The implementation is taken from the ``policy.provider`` security
        property, falling back to
        :class:`~container_authz.security.providers.PolicyFile`.

        Raises
        ------
        InvalidArgument
            If *locator* is empty; the state is left untouched.
        PermissionDenied
            If the context may not replace the policy.
        ConfigurationError
            If the provider cannot be resolved or instantiated.
        """
        locator = _require_locator(locator, "security policy")
        self._context.require(
            SecurityPermission.SET_POLICY,
            SecurityPermission.WRITE_POLICY_PROPERTY,
        )
        provider = self._provider_name(POLICY_PROVIDER, DEFAULT_POLICY_PROVIDER)

        self._state.policy = None
        self._state.policy_locator = locator
        self._state.policy = _instantiate(provider, locator)
        logger.info("Security policy set to %s using %s", locator, provider)

    def _provider_name(self, prop: str, default: str) -> str:
        self._context.require(SecurityPermission.READ_SECURITY_PROPERTY)
        return self._state.security_properties.get(prop) or default


def _require_locator(locator: str | os.PathLike[str] | None, what: str) -> str:
    value = os.fspath(locator) if locator is not None else ""
    if not value:
        raise InvalidArgument(
            f"Locator for the {what} cannot be empty",
            details={"target": what},
        )
    return value


def _instantiate(provider: str, locator: str) -> Any:
    try:
        return load_provider(provider)(locator)
    except Exception as exc:
        raise ConfigurationError(
            f"Could not install security provider {provider!r}: {exc}",
            details={"provider": provider, "locator": locator},
        ) from exc
